"""Cursor state and the motion vocabulary."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional, Tuple

Cursor = Tuple[int, int]  # (row, column in characters)
Selection = Tuple[Cursor, Cursor]  # (anchor, cursor), for rendering only

Motion = Literal[
    "left",
    "right",
    "up",
    "down",
    "word_back",
    "word_forward",
    "line_head",
    "line_end",
    "top",
    "bottom",
]

MOTIONS: tuple[str, ...] = (
    "left",
    "right",
    "up",
    "down",
    "word_back",
    "word_forward",
    "line_head",
    "line_end",
    "top",
    "bottom",
)


@dataclass(slots=True)
class BufferState:
    cursor: Cursor = (0, 0)
    selection: Optional[Selection] = None
    last_change_tick: int = 0

    def set_cursor(self, row: int, col: int) -> None:
        self.cursor = (row, col)

    def clear_selection(self) -> None:
        self.selection = None

    def set_selection(self, anchor: Cursor, cursor: Cursor) -> None:
        self.selection = (anchor, cursor)
