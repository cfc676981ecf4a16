"""Pydantic models for editor session requests and responses."""

from pydantic import BaseModel, Field


class SelectedPropertyModel(BaseModel):
    name: str
    value: str = ""


class SessionResponse(BaseModel):
    """Snapshot of an editor session."""

    session_id: str
    state: str
    selection: list[SelectedPropertyModel]
    text: str
    rendered: str
    parse_error: str | None = None
    updated_at: str


class AddPropertyRequest(BaseModel):
    name: str = Field(min_length=1)


class SetValueRequest(BaseModel):
    value: str


class EditRequest(BaseModel):
    text: str


class BlurRequest(BaseModel):
    """Raw text of the YAML view at the moment it lost focus."""

    text: str


class CommitResponse(BaseModel):
    outcome: str
    changed: bool
    error: str | None = None
    session: SessionResponse
