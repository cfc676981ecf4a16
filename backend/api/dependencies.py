"""
Service lookup for routers.

Services are created once per app in create_app() and stored on
app.state, so each test client gets its own catalog and sessions.
"""

from fastapi import HTTPException, Request

from backend.services.catalog_service import CatalogService
from backend.services.session_service import SessionNotFoundError, SessionService
from generator.session import EditorSession


def get_catalog_service(request: Request) -> CatalogService:
    return request.app.state.catalog_service


def get_session_service(request: Request) -> SessionService:
    return request.app.state.session_service


def get_session(session_id: str, request: Request) -> EditorSession:
    """Resolve a path session id, 404 if unknown."""
    try:
        return get_session_service(request).get(session_id)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail=f"Session '{session_id}' not found") from None
