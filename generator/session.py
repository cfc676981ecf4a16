"""
Editor Session

State machine for the live YAML text view.

    SYNCED  --focus()-->  EDITING
    EDITING --blur(text)--> SYNCED   (text committed into the selection)

While SYNCED the text view follows the rendered selection. While
EDITING the user's draft is left alone. A commit only replaces the
selection when the parsed result differs from it, which keeps the
text view and the property tree from feeding each other forever.
"""

import logging
import uuid
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import Any

import yaml

from .codec import EMPTY_PLACEHOLDER, ERROR_PLACEHOLDER, flatten_mapping, parse_yaml, render_yaml
from .selection import Selection

logger = logging.getLogger(__name__)


class SyncState(Enum):
    """Whether the text view is following the selection."""

    SYNCED = "synced"
    EDITING = "editing"


class CommitOutcome(Enum):
    """What a blur commit did to the selection."""

    REPLACED = "replaced"  # parsed mapping differed, selection swapped
    UNCHANGED = "unchanged"  # parsed mapping equals current selection
    CLEARED = "cleared"  # parsed to a scalar or empty document
    INVALID = "invalid"  # YAML error, selection untouched


@dataclass
class CommitResult:
    """Result of committing edited text."""

    outcome: CommitOutcome
    changed: bool = False
    error: str | None = None


class EditorSession:
    """One user's selection plus the text view bound to it."""

    def __init__(
        self,
        session_id: str | None = None,
        empty_placeholder: str = EMPTY_PLACEHOLDER,
        error_placeholder: str = ERROR_PLACEHOLDER,
    ) -> None:
        self.session_id = session_id or uuid.uuid4().hex
        self.empty_placeholder = empty_placeholder
        self.error_placeholder = error_placeholder
        self.state = SyncState.SYNCED
        self.parse_error: str | None = None
        self.created_at = datetime.now(UTC)
        self.updated_at = self.created_at
        self._selection = Selection()
        self._rendered = self._render(self._selection)
        self.text = self._rendered

    @property
    def selection(self) -> Selection:
        return self._selection

    @property
    def rendered(self) -> str:
        """YAML for the current selection, regardless of what the text view shows."""
        return self._rendered

    def _render(self, selection: Selection) -> str:
        return render_yaml(selection, self.empty_placeholder, self.error_placeholder)

    def _apply(self, selection: Selection) -> bool:
        if selection == self._selection:
            return False
        self._selection = selection
        self.updated_at = datetime.now(UTC)

        rendered = self._render(selection)
        if rendered != self._rendered:
            self._rendered = rendered
            if self.state is SyncState.SYNCED:
                self.text = rendered
        return True

    def add(self, name: str) -> bool:
        return self._apply(self._selection.add(name))

    def remove(self, name: str) -> bool:
        return self._apply(self._selection.remove(name))

    def set_value(self, name: str, value: str) -> bool:
        return self._apply(self._selection.set_value(name, value))

    def replace(self, selection: Selection) -> bool:
        return self._apply(selection)

    def focus(self) -> None:
        """Text view gained focus; stop syncing it from the selection."""
        if self.state is SyncState.EDITING:
            return
        self.state = SyncState.EDITING
        logger.debug("Session %s: text view editing", self.session_id)

    def edit(self, text: str) -> None:
        """Record an in-progress draft. Ignored unless editing."""
        if self.state is SyncState.EDITING:
            self.text = text

    def blur(self, text: str | None = None) -> CommitResult:
        """
        Text view lost focus: commit the raw text into the selection.

        Invalid YAML is logged and otherwise ignored; the selection stays as
        it was and the invalid text stays in the text view.
        """
        if text is not None:
            self.text = text
        self.state = SyncState.SYNCED

        try:
            parsed: Any = parse_yaml(self.text)
        except yaml.YAMLError as e:
            logger.warning("Session %s: invalid YAML format: %s", self.session_id, e)
            self.parse_error = str(e)
            return CommitResult(outcome=CommitOutcome.INVALID, error=self.parse_error)

        self.parse_error = None
        if isinstance(parsed, (Mapping, list)):
            changed = self._apply(Selection.of(flatten_mapping(parsed)))
            outcome = CommitOutcome.REPLACED if changed else CommitOutcome.UNCHANGED
        else:
            changed = self._apply(Selection())
            outcome = CommitOutcome.CLEARED

        logger.debug("Session %s: commit %s", self.session_id, outcome.value)
        return CommitResult(outcome=outcome, changed=changed)

    def snapshot(self) -> dict[str, Any]:
        return {
            "session_id": self.session_id,
            "state": self.state.value,
            "selection": self._selection.to_list(),
            "text": self.text,
            "rendered": self._rendered,
            "parse_error": self.parse_error,
            "updated_at": self.updated_at.isoformat(),
        }
