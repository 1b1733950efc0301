"""Flow sessions store - in-memory, one controller per session."""

import logging
import threading
import uuid
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass

from src.application.flow.controller import FlowController
from src.infrastructure.navigation import RouteNavigator

logger = logging.getLogger(__name__)


@dataclass
class FlowSession:
    """A flow controller with the navigator that records its navigation."""

    id: str
    controller: FlowController
    navigator: RouteNavigator


class FlowSessionStore:
    """Bounded in-memory store; oldest sessions are evicted first.

    Draft state is never persisted: a restart discards every session.
    """

    def __init__(self, max_sessions: int = 1000) -> None:
        """Initialize empty store holding at most max_sessions flows."""
        self._max_sessions = max(1, max_sessions)
        self._sessions: OrderedDict[str, FlowSession] = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._sessions)

    def create(self, factory: Callable[[RouteNavigator], FlowController], navigator: RouteNavigator) -> FlowSession:
        """Create and register a session around a fresh controller."""
        session = FlowSession(id=uuid.uuid4().hex, controller=factory(navigator), navigator=navigator)
        with self._lock:
            self._sessions[session.id] = session
            while len(self._sessions) > self._max_sessions:
                evicted, _ = self._sessions.popitem(last=False)
                logger.info("Evicted flow session %s", evicted)
        return session

    def get(self, session_id: str) -> FlowSession | None:
        """Return session by id or None."""
        return self._sessions.get(session_id)

    def discard(self, session_id: str) -> bool:
        """Drop a session (flow completed or abandoned)."""
        with self._lock:
            return self._sessions.pop(session_id, None) is not None
