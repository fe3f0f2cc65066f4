"""Linear undo/redo history of buffer snapshots."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from .state import Cursor


@dataclass(frozen=True, slots=True)
class UndoEntry:
    label: str
    before: Sequence[str]
    after: Sequence[str]
    cursor_before: Cursor
    cursor_after: Cursor


class UndoTimeline:
    """Entries up to ``_index`` are undoable; entries after it are redoable.

    Pushing a new entry discards everything after ``_index``, which is what
    invalidates redo once a fresh edit lands.
    """

    def __init__(self) -> None:
        self._entries: List[UndoEntry] = []
        self._index: int = -1

    def __len__(self) -> int:
        return len(self._entries)

    def push(self, entry: UndoEntry) -> None:
        if self._index < len(self._entries) - 1:
            del self._entries[self._index + 1 :]
        self._entries.append(entry)
        self._index = len(self._entries) - 1

    def can_undo(self) -> bool:
        return self._index >= 0

    def can_redo(self) -> bool:
        return self._index < len(self._entries) - 1

    def undo(self) -> Optional[UndoEntry]:
        if not self.can_undo():
            return None
        entry = self._entries[self._index]
        self._index -= 1
        return entry

    def redo(self) -> Optional[UndoEntry]:
        if not self.can_redo():
            return None
        self._index += 1
        return self._entries[self._index]

    def clear(self) -> None:
        self._entries.clear()
        self._index = -1
