"""Pytest configuration and shared fixtures."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from src.api.container import Container, reset_container, set_container
from src.api.dependencies import limiter
from src.domain.ports.config import AppConfig
from src.domain.ports.identity import CreatedAccount, SigninLinkResponse
from src.main import app


@pytest.fixture
def fake_identity():
    """Identity service double: account exists, link sent without redirect."""
    service = MagicMock()
    service.check_existence = AsyncMock(return_value=True)
    service.request_signin_link = AsyncMock(return_value=SigninLinkResponse())
    service.create_account = AsyncMock(
        return_value=CreatedAccount(id=1, email="a@b.com", name="A")
    )
    return service


@pytest.fixture
def container(fake_identity):
    """Global container wired to the fake identity service; rate limits off."""
    c = Container(config=AppConfig(), identity=fake_identity)
    set_container(c)
    limiter.enabled = False
    yield c
    limiter.enabled = True
    reset_container()


@pytest.fixture
async def client(container):
    """HTTP client against the ASGI app."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as c:
        yield c
