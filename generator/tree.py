"""
Property Tree

Builds the nested tree shown in the property panel from a flat catalog.
Trees are rebuilt wholesale whenever the search term changes, so nodes
own their children outright and are never shared between builds.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

from .catalog import CatalogEntry
from .selection import Selection

PropertyTree = dict[str, "PropertyNode"]


@dataclass
class PropertyNode:
    """One path segment in the property tree."""

    name: str  # e.g. "application"
    path: str  # e.g. "spring.application"
    description: str | None = None
    children: PropertyTree = field(default_factory=dict)
    is_leaf: bool = False

    @property
    def has_children(self) -> bool:
        return bool(self.children)


def build_property_tree(entries: Iterable[CatalogEntry]) -> PropertyTree:
    """
    Merge dotted catalog names into a tree keyed by path segment.

    A node is a leaf iff its path is an exact catalog name; it may still
    carry children when another name extends it. Child order follows the
    order in which segments are first seen.
    """
    tree: PropertyTree = {}
    for entry in entries:
        parts = entry.name.split(".")
        level = tree
        path = ""
        for index, part in enumerate(parts):
            path = f"{path}.{part}" if index else part
            node = level.get(part)
            if node is None:
                node = PropertyNode(name=part, path=path)
                level[part] = node
            if index == len(parts) - 1:
                node.is_leaf = True
                node.description = entry.description
            level = node.children
    return tree


def iter_nodes(tree: PropertyTree) -> Iterator[PropertyNode]:
    """Depth-first, pre-order walk over every node."""
    for node in tree.values():
        yield node
        yield from iter_nodes(node.children)


def find_node(tree: PropertyTree, path: str) -> PropertyNode | None:
    level = tree
    node = None
    for part in path.split("."):
        node = level.get(part)
        if node is None:
            return None
        level = node.children
    return node


def project_tree(tree: PropertyTree, selection: Selection) -> list[dict[str, Any]]:
    """
    Flatten the tree into JSON-ready view nodes annotated with selection state.

    A branch is marked expanded when any selected property lives beneath
    it, so properties typed into the YAML view become visible in the tree.
    """
    values = {prop.name: prop.value for prop in selection}

    def _project(node: PropertyNode) -> dict[str, Any]:
        prefix = node.path + "."
        return {
            "name": node.name,
            "path": node.path,
            "description": node.description,
            "is_leaf": node.is_leaf,
            "has_children": node.has_children,
            "selected": node.path in values,
            "value": values.get(node.path, ""),
            "expanded": node.has_children and any(name.startswith(prefix) for name in values),
            "children": [_project(child) for child in node.children.values()],
        }

    return [_project(node) for node in tree.values()]
