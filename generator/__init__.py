"""
Spring YAML Generator Core

Pure domain logic behind the visual application.yml editor. Nothing in
this package knows about HTTP; the backend package wraps it.

Modules:
    catalog: Property catalog loading and search filtering
    tree: Property tree construction and view projection
    selection: Selected properties and their pure state transitions
    codec: Selection <-> nested mapping <-> YAML text
    session: Text view state machine (synced / editing)
    config: Generator configuration from config.yaml
"""

from .catalog import CatalogEntry, CatalogError, filter_catalog, load_catalog
from .codec import flatten_mapping, fold_selection, parse_yaml, render_yaml
from .selection import SelectedProperty, Selection
from .session import EditorSession, SyncState
from .tree import PropertyNode, build_property_tree, project_tree

__version__ = "1.0.0"

__all__ = [
    "CatalogEntry",
    "CatalogError",
    "EditorSession",
    "PropertyNode",
    "SelectedProperty",
    "Selection",
    "SyncState",
    "build_property_tree",
    "filter_catalog",
    "flatten_mapping",
    "fold_selection",
    "load_catalog",
    "parse_yaml",
    "project_tree",
    "render_yaml",
]
