import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import PlainTextResponse

from backend.api.dependencies import get_catalog_service, get_session, get_session_service
from backend.api.models.catalog import TreeResponse
from backend.api.models.session import (
    AddPropertyRequest,
    BlurRequest,
    CommitResponse,
    EditRequest,
    SessionResponse,
    SetValueRequest,
)
from backend.services.catalog_service import CatalogService
from backend.services.session_service import SessionService
from generator.session import EditorSession
from generator.tree import project_tree

logger = logging.getLogger("springyaml.api.sessions")
router = APIRouter(prefix="/api/sessions", tags=["sessions"])


def _snapshot(session: EditorSession) -> SessionResponse:
    return SessionResponse(**session.snapshot())


@router.post(
    "",
    summary="Create Session",
    status_code=201,
    response_model=SessionResponse,
)
async def create_session(sessions: SessionService = Depends(get_session_service)) -> SessionResponse:
    return _snapshot(sessions.create())


@router.get("/{session_id}", summary="Get Session", response_model=SessionResponse)
async def read_session(session: EditorSession = Depends(get_session)) -> SessionResponse:
    return _snapshot(session)


@router.delete("/{session_id}", summary="Delete Session", status_code=204)
async def delete_session(
    session: EditorSession = Depends(get_session),
    sessions: SessionService = Depends(get_session_service),
) -> None:
    sessions.delete(session.session_id)


@router.get(
    "/{session_id}/tree",
    summary="Session Property Tree",
    description="Filtered property tree annotated with this session's selection.",
    response_model=TreeResponse,
)
async def session_tree(
    search: str | None = Query(None),
    session: EditorSession = Depends(get_session),
    catalog: CatalogService = Depends(get_catalog_service),
) -> TreeResponse:
    tree = await catalog.tree(search)
    return TreeResponse(search=search, nodes=project_tree(tree, session.selection))  # type: ignore[arg-type]


@router.post(
    "/{session_id}/properties",
    summary="Add Property",
    response_model=SessionResponse,
)
async def add_property(
    payload: AddPropertyRequest,
    session: EditorSession = Depends(get_session),
    sessions: SessionService = Depends(get_session_service),
    catalog: CatalogService = Depends(get_catalog_service),
) -> SessionResponse:
    name = payload.name.strip()
    if not name:
        raise HTTPException(status_code=400, detail="Property name must not be blank")
    if catalog.describe(name) is None:
        logger.info("Session %s: adding uncatalogued property '%s'", session.session_id, name)
    if session.add(name):
        await sessions.publish(session)
    return _snapshot(session)


@router.put(
    "/{session_id}/properties/{name}",
    summary="Set Property Value",
    response_model=SessionResponse,
)
async def set_property_value(
    name: str,
    payload: SetValueRequest,
    session: EditorSession = Depends(get_session),
    sessions: SessionService = Depends(get_session_service),
) -> SessionResponse:
    """Updating a property that is not selected leaves the session unchanged."""
    if session.set_value(name, payload.value):
        await sessions.publish(session)
    return _snapshot(session)


@router.delete(
    "/{session_id}/properties/{name}",
    summary="Remove Property",
    response_model=SessionResponse,
)
async def remove_property(
    name: str,
    session: EditorSession = Depends(get_session),
    sessions: SessionService = Depends(get_session_service),
) -> SessionResponse:
    if session.remove(name):
        await sessions.publish(session)
    return _snapshot(session)


@router.post("/{session_id}/focus", summary="Text View Focused", response_model=SessionResponse)
async def focus_text_view(session: EditorSession = Depends(get_session)) -> SessionResponse:
    session.focus()
    return _snapshot(session)


@router.put("/{session_id}/text", summary="Save Draft", response_model=SessionResponse)
async def edit_text_view(
    payload: EditRequest, session: EditorSession = Depends(get_session)
) -> SessionResponse:
    """Store the in-progress text. Only accepted while the text view is focused."""
    session.edit(payload.text)
    return _snapshot(session)


@router.post(
    "/{session_id}/blur",
    summary="Commit Text View",
    description=(
        "Parses the submitted YAML and replaces the selection with it. "
        "Invalid YAML leaves the selection untouched and is reported in 'error'."
    ),
    response_model=CommitResponse,
)
async def blur_text_view(
    payload: BlurRequest,
    session: EditorSession = Depends(get_session),
    sessions: SessionService = Depends(get_session_service),
) -> CommitResponse:
    result = session.blur(payload.text)
    await sessions.publish(session)
    return CommitResponse(
        outcome=result.outcome.value,
        changed=result.changed,
        error=result.error,
        session=_snapshot(session),
    )


@router.get(
    "/{session_id}/application.yml",
    summary="Download application.yml",
    response_class=PlainTextResponse,
)
async def download_yaml(session: EditorSession = Depends(get_session)) -> PlainTextResponse:
    return PlainTextResponse(
        session.rendered,
        media_type="application/x-yaml",
        headers={"Content-Disposition": 'attachment; filename="application.yml"'},
    )
