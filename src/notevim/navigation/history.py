"""Browser-style history of opened documents."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Optional

from notevim.buffer.state import Cursor


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    identity: str
    position: Cursor = (0, 0)


class NavigationHistory:
    """Entries with a current index; pushing truncates the forward part.

    Revisiting a document appends a new entry instead of reusing an old one.
    ``back`` and ``forward`` never wrap and return ``None`` at either end.
    """

    def __init__(self) -> None:
        self._entries: List[HistoryEntry] = []
        self._index: int = -1

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def index(self) -> int:
        return self._index

    @property
    def current(self) -> Optional[HistoryEntry]:
        if self._index < 0:
            return None
        return self._entries[self._index]

    def entries(self) -> List[HistoryEntry]:
        return list(self._entries)

    def push(self, identity: str, position: Cursor = (0, 0)) -> HistoryEntry:
        del self._entries[self._index + 1 :]
        entry = HistoryEntry(identity, position)
        self._entries.append(entry)
        self._index = len(self._entries) - 1
        return entry

    def remember(self, position: Cursor) -> None:
        """Store the cursor of the current entry before leaving it."""

        if self._index >= 0:
            self._entries[self._index] = replace(self._entries[self._index], position=position)

    def rename(self, old: str, new: str) -> None:
        self._entries = [
            replace(entry, identity=new) if entry.identity == old else entry
            for entry in self._entries
        ]

    def can_go_back(self) -> bool:
        return self._index > 0

    def can_go_forward(self) -> bool:
        return self._index < len(self._entries) - 1

    def back(self) -> Optional[HistoryEntry]:
        if not self.can_go_back():
            return None
        self._index -= 1
        return self._entries[self._index]

    def forward(self) -> Optional[HistoryEntry]:
        if not self.can_go_forward():
            return None
        self._index += 1
        return self._entries[self._index]


__all__ = ["HistoryEntry", "NavigationHistory"]
