"""Navigator adapters."""

from src.infrastructure.navigation.route_navigator import RouteNavigator

__all__ = ["RouteNavigator"]
