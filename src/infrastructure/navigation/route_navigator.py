"""Route navigator - resolves named routes to URLs and records where the user goes."""

import logging
from urllib.parse import urlencode

logger = logging.getLogger(__name__)


class RouteNavigator:
    """Implements NavigatorPort for a host that follows navigation itself.

    Named routes are resolved through a route table; unknown names are
    treated as paths. The last location and full history are kept so the
    host can hand them to the client.
    """

    def __init__(self, route_paths: dict[str, str] | None = None) -> None:
        self._route_paths = dict(route_paths or {})
        self.history: list[str] = []

    @property
    def location(self) -> str | None:
        """Last location navigated to, or None."""
        return self.history[-1] if self.history else None

    def resolve(self, route_name: str, params: dict[str, str] | None = None) -> str:
        """URL for a named route; params become the query string."""
        path = self._route_paths.get(route_name, route_name)
        if not path.startswith(("/", "http://", "https://")):
            path = f"/{path}"
        if params:
            return f"{path}?{urlencode(params)}"
        return path

    async def replace(self, url: str) -> None:
        """Redirect to an absolute or relative url."""
        logger.debug("Navigator replace -> %s", url)
        if self.history:
            self.history[-1] = url
        else:
            self.history.append(url)

    async def push_named(self, route_name: str, params: dict[str, str]) -> None:
        """Navigate to a named route."""
        url = self.resolve(route_name, params)
        logger.debug("Navigator push %s -> %s", route_name, url)
        self.history.append(url)
