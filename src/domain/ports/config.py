"""Config Port - interface for configuration access."""

from pydantic import BaseModel, ConfigDict

from src.domain.entities.flow_state import FlowMode


class SecondaryRoutes(BaseModel):
    """Route remap for the "switch to other mode" action.

    When the route for the target mode is set, switching navigates there
    instead of flipping the mode in place.
    """

    signin: str | None = None
    join: str | None = None

    def for_mode(self, mode: FlowMode) -> str | None:
        """Route that leads to mode, if remapped."""
        if mode is FlowMode.SIGN_IN:
            return self.signin
        return self.join


class FlowOptions(BaseModel):
    """Host-supplied options for a single flow."""

    model_config = ConfigDict(extra="ignore")

    mode: FlowMode | None = None  # Fixed mode: pins the form, disables switching
    default_mode: FlowMode | None = None
    redirect: str | None = None  # Explicit redirect-target override
    origin_url: str = ""
    routes: SecondaryRoutes = SecondaryRoutes()
    # Presentation labels, opaque to the controller.
    labels: dict[str, str] = {}


class IdentityConfig(BaseModel):
    """Identity service connection."""

    base_url: str = "http://localhost:3060"
    graphql_path: str = "/api/graphql"
    api_key: str = ""
    timeout: int = 30


class FlowConfig(BaseModel):
    """Defaults for new flow sessions."""

    default_mode: FlowMode = FlowMode.SIGN_IN
    website_url: str = "http://localhost:3000"
    max_sessions: int = 1000
    # Route name -> path template used by the navigator.
    route_paths: dict[str, str] = {
        "signin": "/signin",
        "join": "/create-account",
        "signinLinkSent": "/signin/sent",
    }


class SecurityConfig(BaseModel):
    """Security settings."""

    rate_limit_requests_per_minute: int = 100
    submit_rate_limit: str = "10/minute"
    cors_origins: list[str] = ["http://localhost:3000"]


class ServerConfig(BaseModel):
    """Server configuration."""

    host: str = "0.0.0.0"
    port: int = 8000


class AppConfig(BaseModel):
    """Full application configuration."""

    server: ServerConfig = ServerConfig()
    identity: IdentityConfig = IdentityConfig()
    flow: FlowConfig = FlowConfig()
    security: SecurityConfig = SecurityConfig()
    log_level: str = "INFO"
    # Log file: path relative to cwd or absolute. Empty = only stdout. Rotation when file exceeds max_mb.
    log_file: str = ""
    log_rotation_max_mb: int = 5
    log_rotation_backups: int = 3
