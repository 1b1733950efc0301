"""Dependency Injection Container - centralized service management."""

from functools import cached_property

from src.api.store import FlowSessionStore
from src.application.flow.controller import FlowController
from src.domain.ports.config import AppConfig, FlowOptions
from src.domain.ports.identity import IdentityServicePort
from src.domain.services.redirect import Location
from src.infrastructure.config import load_config
from src.infrastructure.navigation import RouteNavigator


class Container:
    """Dependency Injection Container with lazy initialization.

    All dependencies are created on first access and cached.

    Usage:
        container = Container()
        session = container.new_flow_session(FlowOptions())
    """

    def __init__(self, config: AppConfig | None = None, identity: IdentityServicePort | None = None):
        """Initialize container with optional config and identity overrides."""
        self._config_override = config
        self._identity_override = identity

    @cached_property
    def config(self) -> AppConfig:
        """Application configuration."""
        if self._config_override is not None:
            return self._config_override
        return load_config()

    @cached_property
    def identity(self) -> IdentityServicePort:
        """Identity service adapter."""
        if self._identity_override is not None:
            return self._identity_override
        from src.infrastructure.identity import HttpIdentityService

        return HttpIdentityService(self.config.identity)

    @cached_property
    def flow_sessions(self) -> FlowSessionStore:
        """In-memory flow sessions."""
        return FlowSessionStore(max_sessions=self.config.flow.max_sessions)

    def new_navigator(self) -> RouteNavigator:
        """Navigator bound to the configured route table."""
        return RouteNavigator(self.config.flow.route_paths)

    def new_flow_controller(
        self,
        options: FlowOptions,
        navigator: RouteNavigator,
        location: Location | None = None,
    ) -> FlowController:
        """Flow controller wired to the identity service; unset options take config defaults."""
        if options.default_mode is None:
            options = options.model_copy(update={"default_mode": self.config.flow.default_mode})
        if not options.origin_url:
            options = options.model_copy(update={"origin_url": self.config.flow.website_url})
        return FlowController(
            identity=self.identity,
            navigator=navigator,
            options=options,
            location_getter=lambda: location or Location(),
        )

    def reset(self) -> None:
        """Reset all cached instances (useful for testing)."""
        for attr in list(self.__dict__.keys()):
            if not attr.startswith("_"):
                delattr(self, attr)


# Global container instance
_container: Container | None = None


def get_container() -> Container:
    """Get or create global container instance."""
    global _container
    if _container is None:
        _container = Container()
    return _container


def set_container(container: Container) -> None:
    """Install a container (for testing)."""
    global _container
    _container = container


def reset_container() -> None:
    """Reset global container (for testing)."""
    global _container
    if _container:
        _container.reset()
    _container = None
