"""Redirect-target resolution for sign-in and confirmation links."""

from dataclasses import dataclass
from urllib.parse import quote

# Characters encodeURIComponent leaves alone besides alphanumerics and "-_.~"
_URI_COMPONENT_SAFE = "!*'()"


@dataclass(frozen=True)
class Location:
    """Current navigable location of the hosting page."""

    path: str = ""
    query: str = ""  # with or without leading "?"

    @property
    def search(self) -> str:
        """Query string with leading "?", or "" when empty."""
        query = self.query.lstrip("?")
        return f"?{query}" if query else ""

    def as_url(self) -> str:
        """Path plus query string ("" when both are empty)."""
        return self.path + self.search


def encode_uri_component(value: str) -> str:
    """Percent-encode value as a single opaque URL component."""
    return quote(value, safe=_URI_COMPONENT_SAFE)


def resolve_redirect_target(override: str | None, location: Location | None = None) -> str:
    """Resolve where the user lands after confirming a link.

    Priority: explicit override, then current path + query, then "/".
    The result is percent-encoded since it is carried inside another URL.
    """
    current = location.as_url() if location else ""
    return encode_uri_component(override or current or "/")
