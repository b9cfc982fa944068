"""
UndoManager - Snapshot history for undo/redo.

Every entry is a full value copy of the ordered box collection. A cursor
points at the entry that matches the live state; entries after it are the
redo branch, entries before it are undo states.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from models.text_box import TextBox

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HistoryEntry:
    """An immutable snapshot of the whole box collection."""

    boxes: tuple[TextBox, ...]
    description: str = ""

    def restore(self) -> tuple[TextBox, ...]:
        """Return fresh copies of the snapshot's boxes."""
        return tuple(box.copy() for box in self.boxes)


class UndoManager:
    """
    Linear snapshot history with a cursor.

    The history always holds at least one entry, so the cursor is always a
    valid index. Committing truncates the redo branch. The oldest entries are
    dropped once ``max_depth`` is exceeded.
    """

    def __init__(self, max_depth: int = 100,
                 initial: Iterable[TextBox] = ()):
        """
        Initialize the undo manager.

        Args:
            max_depth: Maximum number of entries to keep (default 100)
            initial: Box collection recorded as the first entry
        """
        self.max_depth = max(1, max_depth)
        self._entries: list[HistoryEntry] = []
        self._index = 0
        self.clear(initial)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def index(self) -> int:
        """Position of the cursor."""
        return self._index

    def current(self) -> HistoryEntry:
        """Return the entry under the cursor."""
        return self._entries[self._index]

    def commit(self, boxes: Iterable[TextBox], description: str = "") -> HistoryEntry:
        """
        Record *boxes* as the newest entry.

        Discards any entries after the cursor, appends a copy of *boxes* and
        moves the cursor to it.
        """
        entry = HistoryEntry(tuple(box.copy() for box in boxes), description)
        del self._entries[self._index + 1:]
        self._entries.append(entry)

        # Enforce max depth
        overflow = len(self._entries) - self.max_depth
        if overflow > 0:
            del self._entries[:overflow]

        self._index = len(self._entries) - 1
        logger.debug("History commit '%s' (%d/%d)", description,
                     self._index + 1, len(self._entries))
        return entry

    def undo(self) -> Optional[tuple[TextBox, ...]]:
        """
        Step the cursor back.

        Returns:
            Copies of the restored boxes, or None if already at the oldest entry
        """
        if not self.can_undo():
            return None
        self._index -= 1
        return self._entries[self._index].restore()

    def redo(self) -> Optional[tuple[TextBox, ...]]:
        """
        Step the cursor forward.

        Returns:
            Copies of the restored boxes, or None if already at the newest entry
        """
        if not self.can_redo():
            return None
        self._index += 1
        return self._entries[self._index].restore()

    def can_undo(self) -> bool:
        """Return whether there is an older entry to step back to."""
        return self._index > 0

    def can_redo(self) -> bool:
        """Return whether there is a newer entry to step forward to."""
        return self._index < len(self._entries) - 1

    def get_undo_description(self) -> Optional[str]:
        """Description of the change that undo would revert."""
        if self.can_undo():
            return self._entries[self._index].description
        return None

    def get_redo_description(self) -> Optional[str]:
        """Description of the change that redo would reapply."""
        if self.can_redo():
            return self._entries[self._index + 1].description
        return None

    def clear(self, boxes: Iterable[TextBox] = ()) -> None:
        """Reset history to a single entry holding *boxes*."""
        self._entries = [HistoryEntry(tuple(box.copy() for box in boxes), "Initial state")]
        self._index = 0

    def get_undo_count(self) -> int:
        """Return the number of steps undo can take."""
        return self._index

    def get_redo_count(self) -> int:
        """Return the number of steps redo can take."""
        return len(self._entries) - 1 - self._index
