"""Normalization of remote failures into user-visible messages."""

GENERIC_ERROR = "Server error"
GRAPHQL_PREFIX = "GraphQL error: "
PLAIN_PREFIX = "Error: "


def extract_message(exc: BaseException) -> str:
    """Plain message carried by exc ("" if none)."""
    message = getattr(exc, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(exc)


def normalize_error(exc: BaseException) -> str:
    """User-visible message for a failed remote call.

    Hides the GraphQL transport prefix and falls back to a generic message.
    """
    message = extract_message(exc) or GENERIC_ERROR
    return message.replace(GRAPHQL_PREFIX, PLAIN_PREFIX, 1)
