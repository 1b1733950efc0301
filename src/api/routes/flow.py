"""Flow API routes - drive a sign-in / join flow session."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from src.api.container import Container
from src.api.dependencies import (
    get_app_container,
    get_flow_session,
    limiter,
    submit_rate_limit,
)
from src.api.store import FlowSession
from src.application.flow.dto import (
    EmailUpdate,
    FlowSnapshot,
    ModeSwitch,
    StartFlowRequest,
    state_to_snapshot,
)
from src.domain.entities.flow_state import FlowEffect
from src.domain.entities.profile import ProfileDraft
from src.domain.ports.config import FlowOptions, SecondaryRoutes
from src.domain.services.redirect import Location

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/flow", tags=["flow"])


def _snapshot(session: FlowSession, effects: list[FlowEffect] | None = None) -> FlowSnapshot:
    controller = session.controller
    return state_to_snapshot(
        session.id,
        controller.snapshot(),
        displayed_mode=controller.displayed_mode,
        can_switch=controller.options.mode is None,
        labels=controller.options.labels,
        location=session.navigator.location,
        effects=effects,
    )


def _finish(container: Container, session: FlowSession, effects: list[FlowEffect]) -> FlowSnapshot:
    """Snapshot, then drop the session if the flow is done."""
    snapshot = _snapshot(session, effects)
    if snapshot.completed:
        container.flow_sessions.discard(session.id)
        logger.info("Flow session %s completed", session.id)
    return snapshot


@router.post("", response_model=FlowSnapshot, status_code=201)
async def start_flow(
    body: StartFlowRequest,
    container: Container = Depends(get_app_container),
) -> FlowSnapshot:
    """Open a flow session."""
    options = FlowOptions(
        mode=body.mode,
        default_mode=body.default_mode,
        redirect=body.redirect,
        routes=SecondaryRoutes(**(body.routes or {})),
        labels=body.labels,
    )
    location = Location(path=body.path, query=body.query)
    session = container.flow_sessions.create(
        lambda navigator: container.new_flow_controller(options, navigator, location),
        container.new_navigator(),
    )
    return _snapshot(session)


@router.get("/{session_id}", response_model=FlowSnapshot)
async def get_flow(session: FlowSession = Depends(get_flow_session)) -> FlowSnapshot:
    """Current state of a flow session."""
    return _snapshot(session)


@router.delete("/{session_id}", status_code=204)
async def discard_flow(
    session: FlowSession = Depends(get_flow_session),
    container: Container = Depends(get_app_container),
) -> None:
    """Abandon a flow session."""
    container.flow_sessions.discard(session.id)


@router.put("/{session_id}/email", response_model=FlowSnapshot)
async def set_email(
    body: EmailUpdate,
    session: FlowSession = Depends(get_flow_session),
) -> FlowSnapshot:
    """Update the email draft."""
    session.controller.set_email(body.email)
    return _snapshot(session)


@router.post("/{session_id}/mode", response_model=FlowSnapshot)
async def switch_mode(
    body: ModeSwitch,
    session: FlowSession = Depends(get_flow_session),
) -> FlowSnapshot:
    """Flip the active form in place."""
    if not session.controller.switch_mode(body.mode):
        raise HTTPException(status_code=409, detail="Mode cannot be switched now")
    return _snapshot(session)


@router.post("/{session_id}/secondary", response_model=FlowSnapshot)
async def secondary_action(session: FlowSession = Depends(get_flow_session)) -> FlowSnapshot:
    """Go to the other form (navigation when remapped, else in-place flip)."""
    effects = await session.controller.secondary_action()
    return _snapshot(session, effects)


@router.post("/{session_id}/signin", response_model=FlowSnapshot)
@limiter.limit(submit_rate_limit)
async def request_sign_in(
    request: Request,
    session: FlowSession = Depends(get_flow_session),
    container: Container = Depends(get_app_container),
) -> FlowSnapshot:
    """Request a sign-in link for the session's email."""
    effects = await session.controller.request_sign_in()
    return _finish(container, session, effects)


@router.post("/{session_id}/profile", response_model=FlowSnapshot)
@limiter.limit(submit_rate_limit)
async def create_profile(
    request: Request,
    draft: ProfileDraft,
    session: FlowSession = Depends(get_flow_session),
    container: Container = Depends(get_app_container),
) -> FlowSnapshot:
    """Create a personal or organization profile."""
    effects = await session.controller.create_profile(draft)
    return _finish(container, session, effects)
