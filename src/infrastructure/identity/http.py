"""HTTP identity adapter - REST sign-in endpoints plus GraphQL createUser.

No retries: a network failure is reported to the flow immediately. The
client timeout is the only bound on a hung call.
"""

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from src.domain.entities.profile import OrganizationFields, UserFields
from src.domain.ports.config import IdentityConfig
from src.domain.ports.identity import (
    CreatedAccount,
    IdentityServiceError,
    SigninLinkResponse,
)

logger = logging.getLogger(__name__)

CREATE_USER_MUTATION = """
  mutation createUser(
    $user: UserInputType!
    $organization: CollectiveInputType
    $redirect: String
    $websiteUrl: String
  ) {
    createUser(user: $user, organization: $organization, redirect: $redirect, websiteUrl: $websiteUrl) {
      user {
        id
        email
        name
      }
      organization {
        id
        slug
      }
    }
  }
"""


INVALID_RESPONSE = "Invalid response from identity service"


def _graphql_error(data: Any) -> str | None:
    """`GraphQL error: <msg>` from a GraphQL `errors` list, or None."""
    if not isinstance(data, dict):
        return None
    errors = data.get("errors")
    if not isinstance(errors, list) or not errors:
        return None
    first = errors[0] if isinstance(errors[0], dict) else {}
    return f"GraphQL error: {first.get('message', '')}"


def _error_message(resp: httpx.Response) -> str | None:
    """Best-effort message from an error response body."""
    try:
        data = resp.json()
    except ValueError:
        return resp.text.strip() or None
    if not isinstance(data, dict):
        return None
    if graphql := _graphql_error(data):
        return graphql
    err = data.get("error")
    if isinstance(err, dict):
        return err.get("message")
    if isinstance(err, str):
        return err
    message = data.get("message")
    return message if isinstance(message, str) else None


class HttpIdentityService:
    """Implements IdentityServicePort over HTTP."""

    def __init__(
        self,
        config: IdentityConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize with identity config; transport is for tests."""
        self._config = config
        self._base_url = config.base_url.rstrip("/")
        self._headers = {"Content-Type": "application/json"}
        if config.api_key:
            self._headers["Api-Key"] = config.api_key
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create persistent async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._config.timeout,
                headers=self._headers,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the underlying HTTP client (call during app shutdown)."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _request(self, method: str, url: str, **kwargs: Any) -> dict:
        """Send request and return the JSON object body ({} when empty).

        Raises IdentityServiceError on transport failure, status >= 400, or a
        body that is not a JSON object.
        """
        client = self._get_client()
        try:
            resp = await client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("Identity service %s %s failed: %s", method, url, e)
            raise IdentityServiceError(str(e) or None) from e
        if resp.status_code >= 400:
            message = _error_message(resp)
            logger.error("Identity service error %s on %s: %s", resp.status_code, url, message)
            raise IdentityServiceError(message, status_code=resp.status_code)
        if not resp.content:
            return {}
        try:
            data = resp.json()
        except ValueError as e:
            raise IdentityServiceError(INVALID_RESPONSE) from e
        if not isinstance(data, dict):
            logger.error("Identity service returned %s from %s", type(data).__name__, url)
            raise IdentityServiceError(INVALID_RESPONSE)
        return data

    async def check_existence(self, email: str) -> bool:
        """GET /api/users/exists."""
        data = await self._request("GET", "/api/users/exists", params={"email": email})
        return bool(data.get("exists"))

    async def request_signin_link(
        self,
        email: str,
        redirect_target: str,
        origin_url: str,
    ) -> SigninLinkResponse:
        """POST /api/users/signin."""
        data = await self._request(
            "POST",
            "/api/users/signin",
            json={
                "user": {"email": email},
                "redirect": redirect_target,
                "websiteUrl": origin_url,
            },
        )
        redirect = data.get("redirect")
        return SigninLinkResponse(redirect_target=redirect if isinstance(redirect, str) and redirect else None)

    async def create_account(
        self,
        user: UserFields,
        organization: OrganizationFields | None,
        redirect_target: str,
        origin_url: str,
    ) -> CreatedAccount:
        """Run the createUser GraphQL mutation."""
        variables = {
            "user": user.to_payload(),
            "organization": organization.to_payload() if organization else None,
            "redirect": redirect_target,
            "websiteUrl": origin_url,
        }
        data = await self._request(
            "POST",
            self._config.graphql_path,
            json={"query": CREATE_USER_MUTATION, "variables": variables},
        )
        if graphql := _graphql_error(data):
            raise IdentityServiceError(graphql)
        payload = data.get("data")
        result = payload.get("createUser") if isinstance(payload, dict) else None
        if not isinstance(result, dict) or not isinstance(result.get("user"), dict):
            raise IdentityServiceError(INVALID_RESPONSE)
        try:
            return CreatedAccount.model_validate({**result["user"], "organization": result.get("organization")})
        except ValidationError as e:
            raise IdentityServiceError(INVALID_RESPONSE) from e
