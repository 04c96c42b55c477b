"""
In-memory registry of live wizard sessions.
"""

from typing import Callable, Dict, Iterator, Optional

from ...utils.logging import get_logger
from .step_controller import StepController

logger = get_logger("booking.registry")


class SessionRegistry:
    """Keep one :class:`StepController` per session id, oldest evicted first."""

    def __init__(self, max_sessions: Optional[int] = None):
        self.max_sessions = max_sessions
        self._controllers: Dict[str, StepController] = {}

    def create(self, factory: Callable[[], StepController]) -> StepController:
        """Build a controller with ``factory`` and register it under its session id."""
        if self.max_sessions is not None and len(self._controllers) >= self.max_sessions:
            oldest = next(iter(self._controllers))
            logger.info("evicting oldest session", extra={"session_id": oldest})
            self.discard(oldest)

        controller = factory()
        session_id = controller.session.session_id
        self._controllers[session_id] = controller
        logger.info("session created", extra={"session_id": session_id})
        return controller

    def get(self, session_id: str) -> StepController:
        """
        Look up a session.

        Raises:
            KeyError: if the session does not exist
        """
        return self._controllers[session_id]

    def discard(self, session_id: str) -> bool:
        return self._controllers.pop(session_id, None) is not None

    def __len__(self) -> int:
        return len(self._controllers)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._controllers

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._controllers))
