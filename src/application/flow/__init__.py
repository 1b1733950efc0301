"""Sign-in / join flow."""

from src.application.flow.controller import SIGNIN_LINK_SENT_ROUTE, FlowController

__all__ = ["FlowController", "SIGNIN_LINK_SENT_ROUTE"]
