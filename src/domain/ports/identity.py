"""Identity Port - interface for the account / sign-in link service."""

from typing import Protocol

from pydantic import BaseModel

from src.domain.entities.profile import OrganizationFields, UserFields


class IdentityServiceError(Exception):
    """Failure reported by an identity service adapter.

    `message` may be None when the transport gave no usable text.
    """

    def __init__(self, message: str | None = None, status_code: int | None = None) -> None:
        super().__init__(message or "")
        self.message = message
        self.status_code = status_code


class SigninLinkResponse(BaseModel):
    """Result of a sign-in link request.

    `redirect_target` is set when the service resolves the link itself
    (test / sandbox accounts) and the user should be sent there directly.
    """

    redirect_target: str | None = None


class CreatedOrganization(BaseModel):
    """Organization created alongside the user."""

    id: int | str
    slug: str | None = None


class CreatedAccount(BaseModel):
    """Account returned by create_account."""

    id: int | str
    email: str
    name: str | None = None
    organization: CreatedOrganization | None = None


class IdentityServicePort(Protocol):
    """Interface for identity providers."""

    async def check_existence(self, email: str) -> bool:
        """Return True if an account exists for email."""
        ...

    async def request_signin_link(
        self,
        email: str,
        redirect_target: str,
        origin_url: str,
    ) -> SigninLinkResponse:
        """Send a passwordless sign-in link."""
        ...

    async def create_account(
        self,
        user: UserFields,
        organization: OrganizationFields | None,
        redirect_target: str,
        origin_url: str,
    ) -> CreatedAccount:
        """Create a user (and optional organization) and send a confirmation link."""
        ...
