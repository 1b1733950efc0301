"""Flow state for the sign-in / join flow."""

from dataclasses import dataclass, field, replace
from enum import Enum


class FlowMode(str, Enum):
    """Which form is logically active."""

    SIGN_IN = "signin"
    CREATE_ACCOUNT = "create-account"

    @property
    def other(self) -> "FlowMode":
        """The mode a secondary action switches to."""
        if self is FlowMode.SIGN_IN:
            return FlowMode.CREATE_ACCOUNT
        return FlowMode.SIGN_IN


class FlowPhase(str, Enum):
    """Submission phase. Only one remote call may be in flight."""

    IDLE = "idle"
    SUBMITTING = "submitting"


class FailureKind(str, Enum):
    """Failures recovered by the controller and surfaced as `error`."""

    EXISTENCE_CHECK = "existence_check"
    SIGNIN_DISPATCH = "signin_dispatch"
    ACCOUNT_CREATION = "account_creation"
    NAVIGATION = "navigation"  # remote call succeeded, landing page failed


@dataclass
class FlowState:
    """Single mutable record owned by a FlowController."""

    mode: FlowMode = FlowMode.SIGN_IN
    email: str = ""
    phase: FlowPhase = FlowPhase.IDLE
    error: str | None = None
    unknown_email: bool = False
    failure: FailureKind | None = None
    completed: bool = False

    @property
    def submitting(self) -> bool:
        return self.phase is FlowPhase.SUBMITTING

    def copy(self) -> "FlowState":
        """Detached copy for presentation layers."""
        return replace(self)


class FlowEffectKind(str, Enum):
    """Side effects emitted to the presentation layer."""

    REPLACE = "replace"  # immediate external redirect
    PUSH = "push"  # named route, e.g. "link sent" screen
    SCROLL_TO_TOP = "scroll_to_top"


@dataclass(frozen=True)
class FlowEffect:
    """Descriptor of a fire-and-forget side effect."""

    kind: FlowEffectKind
    target: str | None = None  # url for REPLACE, route name for PUSH
    params: dict[str, str] = field(default_factory=dict)

    @classmethod
    def scroll_to_top(cls) -> "FlowEffect":
        return cls(FlowEffectKind.SCROLL_TO_TOP)
