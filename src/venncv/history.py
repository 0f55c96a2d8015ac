"""Undo/redo buffer of whole-document snapshots.

Lives outside the layout core: callers snapshot the document after each
action that changed it (for layout actions, when ``relax_and_validate``
reports a change).
"""

from __future__ import annotations

import copy

from venncv.parser.model import Document

MAX_HISTORY_SIZE: int = 50
"""Snapshots kept before the oldest is dropped."""


class History:
    """Linear snapshot history with a movable cursor."""

    def __init__(self, doc: Document, max_size: int = MAX_HISTORY_SIZE) -> None:
        self.max_size = max_size
        self._snapshots: list[Document] = [copy.deepcopy(doc)]
        self._index = 0

    def record(self, doc: Document) -> None:
        """Store a snapshot, discarding any redo states past the cursor."""
        del self._snapshots[self._index + 1:]
        self._snapshots.append(copy.deepcopy(doc))
        self._index += 1
        if len(self._snapshots) > self.max_size:
            self._snapshots.pop(0)
            self._index -= 1

    def can_undo(self) -> bool:
        return self._index > 0

    def can_redo(self) -> bool:
        return self._index < len(self._snapshots) - 1

    def undo(self) -> Document | None:
        if not self.can_undo():
            return None
        self._index -= 1
        return copy.deepcopy(self._snapshots[self._index])

    def redo(self) -> Document | None:
        if not self.can_redo():
            return None
        self._index += 1
        return copy.deepcopy(self._snapshots[self._index])

    def __len__(self) -> int:
        return len(self._snapshots)
