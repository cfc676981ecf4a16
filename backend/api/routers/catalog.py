import logging

from fastapi import APIRouter, Depends, Query

from backend.api.dependencies import get_catalog_service
from backend.api.models.catalog import CatalogEntryModel, CatalogResponse, TreeResponse
from backend.services.catalog_service import CatalogService
from generator.selection import Selection
from generator.tree import project_tree

logger = logging.getLogger("springyaml.api.catalog")
router = APIRouter(prefix="/api/catalog", tags=["catalog"])


@router.get(
    "",
    summary="List Catalog",
    description="Flat list of known properties, optionally filtered by a case-insensitive name search.",
    response_model=CatalogResponse,
)
async def list_catalog(
    search: str | None = Query(None, description="Substring of the dotted property name"),
    catalog: CatalogService = Depends(get_catalog_service),
) -> CatalogResponse:
    entries = catalog.search(search)
    return CatalogResponse(
        search=search,
        count=len(entries),
        entries=[CatalogEntryModel(name=e.name, description=e.description) for e in entries],
    )


@router.get(
    "/tree",
    summary="Catalog Tree",
    description="The (filtered) catalog as a nested property tree, without selection state.",
    response_model=TreeResponse,
)
async def catalog_tree(
    search: str | None = Query(None),
    catalog: CatalogService = Depends(get_catalog_service),
) -> TreeResponse:
    tree = await catalog.tree(search)
    return TreeResponse(search=search, nodes=project_tree(tree, Selection()))  # type: ignore[arg-type]
