"""Identity service adapters."""

from src.infrastructure.identity.http import HttpIdentityService

__all__ = ["HttpIdentityService"]
