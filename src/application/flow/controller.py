"""Flow controller - sign in with an emailed link, or create a profile."""

import logging
from collections.abc import Callable

from src.domain.entities.flow_state import (
    FailureKind,
    FlowEffect,
    FlowEffectKind,
    FlowMode,
    FlowPhase,
    FlowState,
)
from src.domain.entities.profile import ProfileDraft
from src.domain.ports.config import FlowOptions
from src.domain.ports.identity import IdentityServicePort
from src.domain.ports.navigator import NavigatorPort
from src.domain.services.errors import normalize_error
from src.domain.services.redirect import Location, resolve_redirect_target
from src.shared.logging import mask_email

logger = logging.getLogger(__name__)

SIGNIN_LINK_SENT_ROUTE = "signinLinkSent"


class FlowController:
    """Owns the flow state and runs the sign-in and profile-creation algorithms.

    Shows the sign-in form by default, with the ability to switch to the
    create-account form. At most one remote call is in flight: an action
    invoked while submitting is dropped, not queued. Remote failures are
    recovered here and surface as `state.error`; nothing is raised to the
    caller.
    """

    def __init__(
        self,
        identity: IdentityServicePort,
        navigator: NavigatorPort,
        options: FlowOptions | None = None,
        location_getter: Callable[[], Location] | None = None,
        on_effect: Callable[[FlowEffect], None] | None = None,
    ) -> None:
        self._identity = identity
        self._navigator = navigator
        self._options = options or FlowOptions()
        self._location_getter = location_getter or Location
        self._on_effect = on_effect
        initial = self._options.mode or self._options.default_mode or FlowMode.SIGN_IN
        self._state = FlowState(mode=initial)

    @property
    def state(self) -> FlowState:
        """Live state (read it, do not mutate it)."""
        return self._state

    @property
    def options(self) -> FlowOptions:
        return self._options

    @property
    def displayed_mode(self) -> FlowMode:
        """Fixed mode when pinned by the host, else the current mode."""
        return self._options.mode or self._state.mode

    def snapshot(self) -> FlowState:
        """Detached copy of the current state."""
        return self._state.copy()

    # --- transitions -------------------------------------------------------

    def set_email(self, value: str) -> None:
        """Update the email draft shared by both forms."""
        self._state.email = value

    def switch_mode(self, target: FlowMode) -> bool:
        """Flip the active form. Returns False if switching is not allowed.

        Leaves email, error and unknown_email untouched.
        """
        if self._state.submitting or self._options.mode is not None:
            logger.debug("Mode switch to %s ignored", target.value)
            return False
        self._state.mode = target
        return True

    async def secondary_action(self) -> list[FlowEffect]:
        """Go to the other form: navigate to its route if remapped, else flip mode."""
        target = self.displayed_mode.other
        route = self._options.routes.for_mode(target)
        if route:
            await self._navigator.push_named(route, {})
            return [self._emit(FlowEffect(FlowEffectKind.PUSH, route))]
        self.switch_mode(target)
        return []

    def _begin_submit(self) -> bool:
        if self._state.phase is FlowPhase.SUBMITTING:
            return False
        self._state.phase = FlowPhase.SUBMITTING
        self._state.error = None
        self._state.failure = None
        return True

    def _fail(self, kind: FailureKind, exc: Exception) -> None:
        self._state.error = normalize_error(exc)
        self._state.failure = kind
        logger.warning("Flow %s failed: %s", kind.value, self._state.error)

    def _emit(self, effect: FlowEffect) -> FlowEffect:
        if self._on_effect is not None:
            self._on_effect(effect)
        return effect

    def redirect_target(self) -> str:
        """Percent-encoded page to come back to after confirming a link."""
        return resolve_redirect_target(self._options.redirect, self._location_getter())

    # --- algorithms ------------------------------------------------------

    async def request_sign_in(self) -> list[FlowEffect]:
        """Check the account exists, then send a sign-in link.

        Returns the side effects emitted by this attempt ([] when dropped).
        """
        if not self._begin_submit():
            return []
        self._state.unknown_email = False
        email = self._state.email
        effects: list[FlowEffect] = []
        kind = FailureKind.EXISTENCE_CHECK
        try:
            if not await self._identity.check_existence(email):
                logger.info("No account for %s", mask_email(email))
                self._state.unknown_email = True
                return effects
            kind = FailureKind.SIGNIN_DISPATCH
            response = await self._identity.request_signin_link(
                email,
                self.redirect_target(),
                self._options.origin_url,
            )
            kind = FailureKind.NAVIGATION
            # Sandbox accounts get the resolved link back directly.
            if response.redirect_target:
                await self._navigator.replace(response.redirect_target)
                effects.append(self._emit(FlowEffect(FlowEffectKind.REPLACE, response.redirect_target)))
            else:
                params = {"email": email}
                await self._navigator.push_named(SIGNIN_LINK_SENT_ROUTE, params)
                effects.append(self._emit(FlowEffect(FlowEffectKind.PUSH, SIGNIN_LINK_SENT_ROUTE, params)))
            self._state.completed = True
            logger.info("Sign-in link sent to %s", mask_email(email))
        except Exception as e:  # noqa: BLE001
            self._fail(kind, e)
        finally:
            self._state.phase = FlowPhase.IDLE
        if effects or self._state.error is not None:
            effects.append(self._emit(FlowEffect.scroll_to_top()))
        return effects

    async def create_profile(self, draft: ProfileDraft) -> list[FlowEffect]:
        """Create a personal or organization profile and send its confirmation link."""
        if self._state.submitting:
            return []
        user, organization = draft.split()
        self._begin_submit()
        effects: list[FlowEffect] = []
        kind = FailureKind.ACCOUNT_CREATION
        try:
            await self._identity.create_account(
                user,
                organization,
                self.redirect_target(),
                self._options.origin_url,
            )
            kind = FailureKind.NAVIGATION
            params = {"email": user.email}
            await self._navigator.push_named(SIGNIN_LINK_SENT_ROUTE, params)
            effects.append(self._emit(FlowEffect(FlowEffectKind.PUSH, SIGNIN_LINK_SENT_ROUTE, params)))
            self._state.completed = True
            logger.info(
                "Profile created for %s (organization=%s)",
                mask_email(user.email),
                organization is not None,
            )
        except Exception as e:  # noqa: BLE001
            self._fail(kind, e)
        finally:
            self._state.phase = FlowPhase.IDLE
        effects.append(self._emit(FlowEffect.scroll_to_top()))
        return effects
