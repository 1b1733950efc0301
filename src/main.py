"""Application entry point."""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from src.api.container import get_container
from src.api.dependencies import default_rate_limit, limiter
from src.api.routes.flow import router as flow_router
from src.shared.logging import setup_logging

log = structlog.get_logger()


def _apply_logging_config(container):
    """Apply logging from container config (stdout + optional file)."""
    c = container.config
    setup_logging(
        level=c.log_level,
        file_path=c.log_file or "",
        rotation_max_mb=c.log_rotation_max_mb,
        rotation_backups=c.log_rotation_backups,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: load config and set up logging. Shutdown: close the identity client."""
    container = get_container()
    _apply_logging_config(container)
    log.info("startup_complete", identity_base_url=container.config.identity.base_url)
    yield
    log.info("shutdown_begin")
    if hasattr(container.identity, "close"):
        try:
            await container.identity.close()
        except Exception:  # noqa: BLE001
            log.debug("identity_close_error", exc_info=True)
    log.info("shutdown_complete")


app = FastAPI(
    title="Sign-in Flow",
    version="0.1.0",
    description="Passwordless sign-in and profile creation flow",
    lifespan=lifespan,
)

# Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# CORS
container = get_container()
app.add_middleware(
    CORSMiddleware,
    allow_origins=container.config.security.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(flow_router)


@app.get("/health")
@limiter.limit(default_rate_limit)
async def health(request: Request) -> dict:
    """Health check."""
    container = get_container()
    return {
        "status": "ok",
        "service": "signin-flow",
        "active_flows": len(container.flow_sessions),
    }
