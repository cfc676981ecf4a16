import logging
from typing import Any

import socketio

logger = logging.getLogger("springyaml.websockets")

SESSION_UPDATED_EVENT = "session_updated"


def session_room(session_id: str) -> str:
    return f"session:{session_id}"


class WebSocketManager:
    """
    Singleton manager for the Socket.IO AsyncServer.
    Pushes editor session changes to every browser tab subscribed to that session.
    """

    _instance: "WebSocketManager | None" = None
    sio: socketio.AsyncServer

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            # Initialize AsyncServer in ASGI mode
            cls._instance.sio = socketio.AsyncServer(
                async_mode="asgi",
                cors_allowed_origins="*",
                logger=False,  # Set to True for verbose debug
                engineio_logger=False,
            )
            cls._instance._register_handlers()
        return cls._instance

    def configure_cors(self, origins: list[str]) -> None:
        """Apply the same allowed origins the HTTP CORS middleware uses."""
        allowed: str | list[str] = "*" if "*" in origins else list(origins)
        self.sio.eio.cors_allowed_origins = allowed
        logger.debug("Socket.IO allowed origins: %s", allowed)

    def _register_handlers(self) -> None:
        sio = self.sio

        @sio.event
        async def subscribe(sid: str, data: Any) -> dict[str, Any]:  # pyright: ignore [reportUnusedFunction]
            session_id = data.get("session_id") if isinstance(data, dict) else None
            if not session_id:
                return {"ok": False, "error": "session_id required"}
            await sio.enter_room(sid, session_room(session_id))
            logger.debug("Client %s subscribed to session %s", sid, session_id)
            return {"ok": True}

        @sio.event
        async def unsubscribe(sid: str, data: Any) -> None:  # pyright: ignore [reportUnusedFunction]
            session_id = data.get("session_id") if isinstance(data, dict) else None
            if session_id:
                await sio.leave_room(sid, session_room(session_id))

    async def emit(self, event: str, data: Any, to: str | None = None):
        """
        Emit an event from an async context (e.g. FastAPI route).
        """
        await self.sio.emit(event, data, to=to)  # pyright: ignore [reportUnknownMemberType]

    async def push_session(self, snapshot: dict[str, Any]) -> None:
        """Broadcast a session snapshot to its subscribers. Failures are logged, not raised."""
        session_id = snapshot["session_id"]
        try:
            await self.emit(SESSION_UPDATED_EVENT, snapshot, to=session_room(session_id))
        except Exception as e:
            logger.error(f"WebSocketManager: Failed to push session '{session_id}': {e}")


# Global instance
ws_manager = WebSocketManager()
