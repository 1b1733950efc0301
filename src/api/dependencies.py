"""FastAPI dependencies - DI container."""

from fastapi import HTTPException
from slowapi import Limiter
from slowapi.util import get_remote_address

from src.api.container import Container, get_container
from src.api.store import FlowSession
from src.domain.ports.config import AppConfig

limiter = Limiter(key_func=get_remote_address)


def get_app_container() -> Container:
    """Current DI container."""
    return get_container()


def get_config() -> AppConfig:
    """Application configuration."""
    return get_container().config


def default_rate_limit() -> str:
    """Per-client limit for lightweight endpoints."""
    return f"{get_container().config.security.rate_limit_requests_per_minute}/minute"


def submit_rate_limit() -> str:
    """Rate limit for endpoints that hit the identity service."""
    return get_container().config.security.submit_rate_limit


def get_flow_session(session_id: str) -> FlowSession:
    """Resolve a flow session or 404."""
    session = get_container().flow_sessions.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Flow session not found")
    return session
