"""
Editor Session Service

In-memory registry of editor sessions. Sessions are not persisted; the
least recently used one is evicted once the registry is full.
"""

import logging
from collections import OrderedDict

from backend.core.websockets import ws_manager
from generator.codec import EMPTY_PLACEHOLDER, ERROR_PLACEHOLDER
from generator.session import EditorSession

logger = logging.getLogger("springyaml.services.sessions")


class SessionNotFoundError(KeyError):
    """Raised when a session id is unknown or was evicted."""


class SessionService:
    """Creates, looks up and evicts editor sessions."""

    def __init__(
        self,
        max_sessions: int = 256,
        empty_placeholder: str = EMPTY_PLACEHOLDER,
        error_placeholder: str = ERROR_PLACEHOLDER,
    ) -> None:
        self._sessions: OrderedDict[str, EditorSession] = OrderedDict()
        self._max_sessions = max(1, max_sessions)
        self._empty_placeholder = empty_placeholder
        self._error_placeholder = error_placeholder

    def __len__(self) -> int:
        return len(self._sessions)

    def create(self) -> EditorSession:
        session = EditorSession(
            empty_placeholder=self._empty_placeholder,
            error_placeholder=self._error_placeholder,
        )
        self._sessions[session.session_id] = session
        while len(self._sessions) > self._max_sessions:
            evicted_id, _ = self._sessions.popitem(last=False)
            logger.info("Evicted least recently used session %s", evicted_id)
        logger.info("Created session %s", session.session_id)
        return session

    def get(self, session_id: str) -> EditorSession:
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        self._sessions.move_to_end(session_id)
        return session

    def delete(self, session_id: str) -> None:
        if self._sessions.pop(session_id, None) is None:
            raise SessionNotFoundError(session_id)
        logger.info("Deleted session %s", session_id)

    async def publish(self, session: EditorSession) -> None:
        """Push the session's current state to subscribed browser tabs."""
        await ws_manager.push_session(session.snapshot())
