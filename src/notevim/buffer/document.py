"""Line-sequence storage for buffers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence


@dataclass(slots=True)
class BufferDocument:
    """Ordered lines of a document; never empty.

    Mutating helpers return a fresh document with a bumped version so that
    snapshots handed out earlier stay valid.
    """

    _lines: List[str] = field(default_factory=lambda: [""])
    version: int = 0
    dirty: bool = False

    def __post_init__(self) -> None:
        if not self._lines:
            self._lines = [""]

    @classmethod
    def from_text(cls, text: str) -> "BufferDocument":
        # Only "\n" separates lines; other break characters stay in the line.
        return cls(_lines=text.split("\n"))

    def to_text(self) -> str:
        return "\n".join(self._lines)

    def snapshot(self) -> Sequence[str]:
        return tuple(self._lines)

    def replace(self, lines: Iterable[str]) -> "BufferDocument":
        return BufferDocument(
            _lines=list(lines) or [""], version=self.version + 1, dirty=True
        )

    def update_lines(
        self, start: int, end: int, new_lines: Iterable[str]
    ) -> "BufferDocument":
        """Return a document with ``[start:end]`` replaced by ``new_lines``."""

        lines = list(self._lines)
        lines[start:end] = list(new_lines)
        return self.replace(lines)

    def mark_clean(self) -> None:
        self.dirty = False

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def get_line(self, index: int) -> str:
        return self._lines[index]
