"""
Catalog Service

Holds the loaded property catalog and caches the tree built for each
search term.
"""

import logging
from collections.abc import Sequence

from backend.core.cache import TTLCache
from generator.catalog import CatalogEntry, describe, filter_catalog
from generator.tree import PropertyTree, build_property_tree

logger = logging.getLogger("springyaml.services.catalog")


class CatalogService:
    """Read-only access to the catalog and its per-search trees."""

    def __init__(self, entries: Sequence[CatalogEntry], cache_ttl_seconds: float = 300.0) -> None:
        self._entries = tuple(entries)
        self._ttl = cache_ttl_seconds
        self._cache = TTLCache()

    @property
    def entries(self) -> tuple[CatalogEntry, ...]:
        return self._entries

    def search(self, term: str | None) -> list[CatalogEntry]:
        return filter_catalog(self._entries, term)

    def describe(self, name: str) -> str | None:
        return describe(self._entries, name)

    async def tree(self, term: str | None = None) -> PropertyTree:
        """Tree for the filtered catalog. Cached trees are shared, so callers must not mutate them."""
        needle = term.lower() if term and term.strip() else ""
        key = f"catalog:tree:{needle}"

        async def _build() -> PropertyTree:
            matches = self.search(term)
            logger.debug("Building property tree for %r (%d entries)", term, len(matches))
            return build_property_tree(matches)

        return await self._cache.get_or_set(key, _build, self._ttl)

    async def invalidate(self) -> None:
        await self._cache.invalidate_prefix("catalog:tree:")
