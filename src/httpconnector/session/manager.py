"""
Process-wide session registry.

One SessionManager is created at startup and passed to every handler that
needs it. Worker threads add and look up sessions concurrently, so every
access goes through a single lock. Sessions are never expired or evicted;
they live as long as the process.
"""

import logging
import threading
from typing import Dict

from .session import Session

logger = logging.getLogger(__name__)


class SessionNotFound(KeyError):
    """Raised when a session id is not registered."""

    def __init__(self, session_id: str):
        super().__init__(session_id)
        self.session_id = session_id

    def __str__(self) -> str:
        return f"No session with id {self.session_id!r}"


class SessionManager:
    """Thread-safe mapping of session id to Session."""

    def __init__(self):
        self._sessions: Dict[str, Session] = {}
        self._lock = threading.Lock()

    def add(self, session: Session) -> None:
        """
        Register a session.

        The id is assumed unique; a session added under an existing id
        replaces the old one.
        """
        with self._lock:
            self._sessions[session.id] = session
        logger.debug(f"Session registered: {session.id}")

    def find_session(self, session_id: str) -> Session:
        """
        Look up a session by id.

        Raises:
            SessionNotFound: If no session has that id.
        """
        with self._lock:
            session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFound(session_id)
        return session

    def contains(self, session_id: str) -> bool:
        with self._lock:
            return session_id in self._sessions

    def __contains__(self, session_id: object) -> bool:
        return isinstance(session_id, str) and self.contains(session_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
