"""
Selection State

The ordered list of properties the user has chosen to include in the
generated application.yml. Every operation returns a new Selection and
leaves the receiver untouched.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class SelectedProperty:
    """A chosen property and its raw string value."""

    name: str
    value: str = ""

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "value": self.value}


@dataclass(frozen=True)
class Selection:
    """Insertion-ordered properties, unique by name."""

    entries: tuple[SelectedProperty, ...] = ()

    @classmethod
    def of(cls, properties: Iterable[SelectedProperty | dict[str, Any]]) -> "Selection":
        """
        Build a selection from properties or {name, value} dicts.

        A repeated name keeps its first position but takes the last value,
        the same last-write-wins rule fold_selection applies.
        """
        merged: dict[str, SelectedProperty] = {}
        for prop in properties:
            if isinstance(prop, dict):
                prop = SelectedProperty(name=str(prop["name"]), value=str(prop.get("value", "")))
            merged[prop.name] = prop
        return cls(tuple(merged.values()))

    def __iter__(self) -> Iterator[SelectedProperty]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, name: object) -> bool:
        return any(prop.name == name for prop in self.entries)

    def get(self, name: str) -> SelectedProperty | None:
        for prop in self.entries:
            if prop.name == name:
                return prop
        return None

    @property
    def names(self) -> list[str]:
        return [prop.name for prop in self.entries]

    def add(self, name: str) -> "Selection":
        """Append name with an empty value; no-op if already selected."""
        if name in self:
            return self
        return Selection(self.entries + (SelectedProperty(name=name),))

    def remove(self, name: str) -> "Selection":
        """Drop name; no-op if absent."""
        if name not in self:
            return self
        return Selection(tuple(prop for prop in self.entries if prop.name != name))

    def set_value(self, name: str, value: str) -> "Selection":
        """Replace the value of name. Never creates a missing entry."""
        if name not in self:
            return self
        return Selection(
            tuple(
                SelectedProperty(name=prop.name, value=value) if prop.name == name else prop
                for prop in self.entries
            )
        )

    def to_list(self) -> list[dict[str, str]]:
        return [prop.to_dict() for prop in self.entries]
