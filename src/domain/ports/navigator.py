"""Navigator Port - interface for the hosting routing subsystem."""

from typing import Protocol


class NavigatorPort(Protocol):
    """Navigation side effects requested by the flow."""

    async def replace(self, url: str) -> None:
        """Redirect immediately to url, replacing the current location."""
        ...

    async def push_named(self, route_name: str, params: dict[str, str]) -> None:
        """Navigate to a named route."""
        ...
