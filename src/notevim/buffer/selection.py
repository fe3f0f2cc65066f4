"""Selection geometry and the edits performed over a selection.

Everything here is a pure function over a sequence of lines. Short rows are
clamped or padded, never rejected: a block that overhangs a line yields a
truncated (possibly empty) slice, and a block insert past the end of a line
pads it with spaces first.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .coords import char_slice, clamp_col, splice
from .state import Cursor


@dataclass(frozen=True, slots=True)
class SelectionRect:
    """Min/max normalisation of an anchor and a cursor on both axes."""

    min_row: int
    max_row: int
    min_col: int
    max_col: int

    @classmethod
    def from_points(cls, anchor: Cursor, cursor: Cursor) -> "SelectionRect":
        (a_row, a_col), (c_row, c_col) = anchor, cursor
        return cls(
            min_row=min(a_row, c_row),
            max_row=max(a_row, c_row),
            min_col=min(a_col, c_col),
            max_col=max(a_col, c_col),
        )

    @property
    def rows(self) -> range:
        return range(self.min_row, self.max_row + 1)

    @property
    def width(self) -> int:
        return self.max_col - self.min_col + 1


def ordered_span(anchor: Cursor, cursor: Cursor) -> Tuple[Cursor, Cursor]:
    """Return ``(start, end)`` in document order."""

    if anchor <= cursor:
        return anchor, cursor
    return cursor, anchor


def block_yank(lines: Sequence[str], rect: SelectionRect) -> List[str]:
    return [char_slice(lines[row], rect.min_col, rect.max_col + 1) for row in rect.rows]


def block_delete(
    lines: Sequence[str], rect: SelectionRect
) -> Tuple[List[str], Cursor]:
    updated = list(lines)
    for row in reversed(rect.rows):
        updated[row] = splice(updated[row], rect.min_col, rect.max_col + 1)
    cursor = (rect.min_row, clamp_col(updated[rect.min_row], rect.min_col))
    return updated, cursor


def char_yank(lines: Sequence[str], anchor: Cursor, cursor: Cursor) -> List[str]:
    (start_row, start_col), (end_row, end_col) = ordered_span(anchor, cursor)
    if start_row == end_row:
        return [char_slice(lines[start_row], start_col, end_col)]
    first = lines[start_row]
    yanked = [first[clamp_col(first, start_col) :]]
    yanked.extend(lines[start_row + 1 : end_row])
    yanked.append(char_slice(lines[end_row], 0, end_col))
    return yanked


def char_delete(
    lines: Sequence[str], anchor: Cursor, cursor: Cursor
) -> Tuple[List[str], Cursor]:
    """Delete ``[start, end)``; a multi-row span collapses into one row."""

    (start_row, start_col), (end_row, end_col) = ordered_span(anchor, cursor)
    updated = list(lines)
    first = updated[start_row]
    start_col = clamp_col(first, start_col)
    if start_row == end_row:
        updated[start_row] = splice(first, start_col, end_col)
    else:
        last = updated[end_row]
        updated[start_row : end_row + 1] = [
            first[:start_col] + last[clamp_col(last, end_col) :]
        ]
    return updated, (start_row, start_col)


def block_insert(
    lines: Sequence[str], min_row: int, max_row: int, col: int, text: str
) -> List[str]:
    """Insert ``text`` at ``col`` on every row of ``[min_row, max_row]``."""

    updated = list(lines)
    for row in range(min_row, max_row + 1):
        line = updated[row]
        if len(line) < col:
            line = line + " " * (col - len(line))
        updated[row] = line[:col] + text + line[col:]
    return updated


def block_erase(
    lines: Sequence[str], min_row: int, max_row: int, col: int
) -> List[str]:
    """Remove the character at ``col`` on every row long enough to have one."""

    updated = list(lines)
    for row in range(min_row, max_row + 1):
        line = updated[row]
        if col < len(line):
            updated[row] = line[:col] + line[col + 1 :]
    return updated


__all__ = [
    "SelectionRect",
    "block_delete",
    "block_erase",
    "block_insert",
    "block_yank",
    "char_delete",
    "char_yank",
    "ordered_span",
]
