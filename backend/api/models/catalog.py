"""Pydantic models for the property catalog and tree."""

from pydantic import BaseModel


class CatalogEntryModel(BaseModel):
    name: str
    description: str


class CatalogResponse(BaseModel):
    """Response model for /api/catalog endpoint."""

    search: str | None = None
    count: int
    entries: list[CatalogEntryModel]


class PropertyNodeView(BaseModel):
    """One node of the property tree as the UI renders it."""

    name: str
    path: str
    description: str | None = None
    is_leaf: bool
    has_children: bool
    selected: bool = False
    value: str = ""
    expanded: bool = False
    children: list["PropertyNodeView"] = []


class TreeResponse(BaseModel):
    """Response model for tree endpoints."""

    search: str | None = None
    nodes: list[PropertyNodeView]
