"""
Property Catalog

Static list of known Spring Boot property names with their descriptions.
The catalog is read once from JSON and never mutated; search filtering
returns a new list.
"""

import json
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).parent / "data" / "spring.config.info.json"


class CatalogError(ValueError):
    """Raised when a catalog file cannot be read or is malformed."""


@dataclass(frozen=True)
class CatalogEntry:
    """A single known property."""

    name: str
    description: str


def _parse_entries(raw: object, source: str) -> list[CatalogEntry]:
    if not isinstance(raw, list):
        raise CatalogError(f"Catalog {source} must be a JSON array")

    entries: list[CatalogEntry] = []
    for index, item in enumerate(raw):
        if not isinstance(item, dict):
            raise CatalogError(f"Catalog {source}[{index}] must be an object")
        name = item.get("name")
        description = item.get("description", "")
        if not isinstance(name, str) or not name:
            raise CatalogError(f"Catalog {source}[{index}].name must be a non-empty string")
        if not isinstance(description, str):
            raise CatalogError(f"Catalog {source}[{index}].description must be a string")
        entries.append(CatalogEntry(name=name, description=description))
    return entries


def load_catalog(path: str | Path | None = None) -> list[CatalogEntry]:
    """
    Load the property catalog from a JSON file.

    Falls back to the bundled Spring Boot catalog when no path is given.
    Raises CatalogError if the file is missing or malformed.
    """
    catalog_path = Path(path) if path else DEFAULT_CATALOG_PATH
    try:
        with catalog_path.open(encoding="utf-8") as f:
            raw = json.load(f)
    except FileNotFoundError as e:
        raise CatalogError(f"Catalog file not found: {catalog_path}") from e
    except json.JSONDecodeError as e:
        raise CatalogError(f"Catalog {catalog_path} is not valid JSON: {e}") from e

    entries = _parse_entries(raw, catalog_path.name)
    logger.info("Loaded %d catalog entries from %s", len(entries), catalog_path)
    return entries


def filter_catalog(entries: Iterable[CatalogEntry], term: str | None) -> list[CatalogEntry]:
    """Case-insensitive substring match on the dotted name. Blank term keeps everything."""
    if not term or not term.strip():
        return list(entries)
    needle = term.lower()
    return [entry for entry in entries if needle in entry.name.lower()]


def describe(entries: Sequence[CatalogEntry], name: str) -> str | None:
    """Return the description for a property name, or None if it is not catalogued."""
    for entry in entries:
        if entry.name == name:
            return entry.description
    return None
