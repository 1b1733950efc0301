"""Flow DTOs."""

from pydantic import BaseModel, Field

from src.domain.entities.flow_state import FlowEffect, FlowMode, FlowState


class StartFlowRequest(BaseModel):
    """Request to open a flow session."""

    mode: FlowMode | None = None  # Pins the form
    default_mode: FlowMode | None = None
    redirect: str | None = Field(None, max_length=2000)
    path: str = Field("", max_length=2000)  # Current page path of the host
    query: str = Field("", max_length=2000)
    routes: dict[str, str] | None = None  # {"signin": ..., "join": ...}
    labels: dict[str, str] = {}


class EmailUpdate(BaseModel):
    """New email draft."""

    email: str = Field(..., max_length=320)


class ModeSwitch(BaseModel):
    """Target form."""

    mode: FlowMode


class EffectDTO(BaseModel):
    """Side effect for the presentation layer."""

    kind: str
    target: str | None = None
    params: dict[str, str] = {}


class FlowSnapshot(BaseModel):
    """Read-only view of a flow session."""

    session_id: str
    mode: FlowMode
    displayed_mode: FlowMode
    email: str
    submitting: bool
    error: str | None = None
    unknown_email: bool = False
    completed: bool = False
    can_switch: bool = True
    labels: dict[str, str] = {}
    location: str | None = None  # Where the navigator last sent the user
    effects: list[EffectDTO] = []


def effect_to_dto(effect: FlowEffect) -> EffectDTO:
    """Convert FlowEffect to EffectDTO."""
    return EffectDTO(kind=effect.kind.value, target=effect.target, params=dict(effect.params))


def state_to_snapshot(
    session_id: str,
    state: FlowState,
    displayed_mode: FlowMode,
    can_switch: bool,
    labels: dict[str, str],
    location: str | None = None,
    effects: list[FlowEffect] | None = None,
) -> FlowSnapshot:
    """Map flow state to snapshot."""
    return FlowSnapshot(
        session_id=session_id,
        mode=state.mode,
        displayed_mode=displayed_mode,
        email=state.email,
        submitting=state.submitting,
        error=state.error,
        unknown_email=state.unknown_email,
        completed=state.completed,
        can_switch=can_switch,
        labels=labels,
        location=location,
        effects=[effect_to_dto(e) for e in effects or []],
    )
