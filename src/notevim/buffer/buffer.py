"""Buffer façade combining document, cursor state, registers and undo."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import ContextManager, Iterable, Optional, Sequence

from notevim.runtime import telemetry

from .coords import byte_offset, clamp_col
from .document import BufferDocument
from .registers import RegisterBank
from .state import BufferState, Cursor, Motion
from .undo import UndoEntry, UndoTimeline
from .validation import clamp_cursor, ensure_cursor
from .sync import BufferMirror


@dataclass(slots=True)
class BufferDelta:
    version: int
    cursor: Cursor
    label: str
    changed: bool


class Buffer:
    """Lines plus a cursor; every content change is recorded for undo.

    Cursor motions never touch the undo history. Loading new content
    replaces the document wholesale and clears both undo and redo.
    """

    def __init__(
        self,
        *,
        name: str = "default",
        document: Optional[BufferDocument] = None,
        state: Optional[BufferState] = None,
        registers: Optional[RegisterBank] = None,
        undo: Optional[UndoTimeline] = None,
    ) -> None:
        self.name = name
        self.document = document or BufferDocument()
        self.state = state or BufferState()
        self.registers = registers or RegisterBank()
        self.undo_history = undo or UndoTimeline()

    @classmethod
    def from_text(cls, text: str, *, name: str = "default") -> "Buffer":
        return cls(name=name, document=BufferDocument.from_text(text))

    @property
    def lines(self) -> Sequence[str]:
        return self.document.snapshot()

    @property
    def cursor(self) -> Cursor:
        return self.state.cursor

    @property
    def line_count(self) -> int:
        return self.document.line_count

    def line(self, row: Optional[int] = None) -> str:
        return self.document.get_line(self.cursor[0] if row is None else row)

    def to_text(self) -> str:
        return self.document.to_text()

    @property
    def dirty(self) -> bool:
        return self.document.dirty

    def mark_saved(self) -> None:
        self.document.mark_clean()

    def mirror(self, *, attributes: Optional[dict[str, str]] = None) -> BufferMirror:
        row, col = self.cursor
        return BufferMirror(
            text=self.to_text(),
            cursor=self.cursor,
            selection=self.state.selection,
            cursor_byte=byte_offset(self.line(row), col),
            attributes=dict(attributes or {}),
        )

    def load(self, text: str, *, name: Optional[str] = None) -> None:
        if name is not None:
            self.name = name
        self.document = BufferDocument.from_text(text)
        self.state = BufferState()
        self.undo_history.clear()
        telemetry.record_event(
            "buffer.load",
            data={"buffer": self.name, "lines": self.document.line_count},
        )

    # -- cursor -----------------------------------------------------------

    def set_cursor(self, row: int, col: int) -> Cursor:
        cursor = clamp_cursor(self.document, (row, col))
        self.state.set_cursor(*cursor)
        return cursor

    def move(self, motion: Motion) -> Cursor:
        target = _motion_target(self.lines, self.cursor, motion)
        return self.set_cursor(*target)

    # -- edits ------------------------------------------------------------

    def insert_text(self, text: str) -> BufferDelta:
        with Transaction(self, "insert_text") as tx:
            row, col = self.cursor
            line = self.line(row)
            pieces = text.split("\n")
            if len(pieces) == 1:
                new_lines = [line[:col] + text + line[col:]]
                cursor = (row, col + len(text))
            else:
                new_lines = [line[:col] + pieces[0], *pieces[1:-1], pieces[-1] + line[col:]]
                cursor = (row + len(pieces) - 1, len(pieces[-1]))
            self._splice_rows(row, row + 1, new_lines, cursor)
        return tx.delta

    def insert_char(self, char: str) -> BufferDelta:
        return self.insert_text(char)

    def delete_before(self) -> BufferDelta:
        with Transaction(self, "delete_before") as tx:
            row, col = self.cursor
            line = self.line(row)
            if col > 0:
                self._splice_rows(row, row + 1, [line[: col - 1] + line[col:]], (row, col - 1))
            elif row > 0:
                previous = self.line(row - 1)
                self._splice_rows(row - 1, row + 1, [previous + line], (row - 1, len(previous)))
        return tx.delta

    def delete_after(self) -> BufferDelta:
        with Transaction(self, "delete_after") as tx:
            row, col = self.cursor
            line = self.line(row)
            if col < len(line):
                self._splice_rows(row, row + 1, [line[:col] + line[col + 1 :]], (row, col))
            elif row < self.line_count - 1:
                self._splice_rows(row, row + 2, [line + self.line(row + 1)], (row, col))
        return tx.delta

    def split_line(self) -> BufferDelta:
        return self.insert_text("\n")

    def delete_to_line_end(self) -> BufferDelta:
        with Transaction(self, "delete_to_line_end") as tx:
            row, col = self.cursor
            self._splice_rows(row, row + 1, [self.line(row)[:col]], (row, col))
        return tx.delta

    def delete_line(self, row: Optional[int] = None) -> str:
        """Remove a whole row and return its text."""

        target = self.cursor[0] if row is None else row
        removed = self.line(target)
        with Transaction(self, "delete_line"):
            if self.line_count == 1:
                self._splice_rows(0, 1, [""], (0, 0))
            else:
                next_row = min(target, self.line_count - 2)
                self._splice_rows(target, target + 1, [], (next_row, 0))
        return removed

    def replace_line(self, row: int, text: str) -> BufferDelta:
        with Transaction(self, "replace_line") as tx:
            _, col = self.cursor
            self._splice_rows(row, row + 1, [text], (row, min(col, len(text))))
        return tx.delta

    def insert_lines_below(self, lines: Iterable[str]) -> BufferDelta:
        new_lines = list(lines)
        with Transaction(self, "insert_lines_below") as tx:
            row = self.cursor[0]
            if new_lines:
                cursor = (row + len(new_lines), len(new_lines[-1]))
                self._splice_rows(row + 1, row + 1, new_lines, cursor)
        return tx.delta

    def replace_lines(
        self, lines: Iterable[str], cursor: Cursor, *, label: str = "replace_lines"
    ) -> BufferDelta:
        """Install a whole new line sequence as one undoable step."""

        with Transaction(self, label) as tx:
            self._splice_rows(0, self.line_count, list(lines), cursor)
        return tx.delta

    # -- history ----------------------------------------------------------

    def undo(self) -> bool:
        entry = self.undo_history.undo()
        if entry is None:
            return False
        self._install(entry.before, entry.cursor_before)
        return True

    def redo(self) -> bool:
        entry = self.undo_history.redo()
        if entry is None:
            return False
        self._install(entry.after, entry.cursor_after)
        return True

    def _install(self, lines: Sequence[str], cursor: Cursor) -> None:
        self.document = self.document.replace(lines)
        self.set_cursor(*cursor)
        self.state.last_change_tick = self.document.version

    def _splice_rows(
        self, start: int, end: int, new_lines: Sequence[str], cursor: Cursor
    ) -> None:
        self.document = self.document.update_lines(start, end, new_lines)
        self.state.set_cursor(*ensure_cursor(self.document, clamp_cursor(self.document, cursor)))
        self.state.last_change_tick = self.document.version


class Transaction(AbstractContextManager["Transaction"]):
    """Groups buffer mutations into a single undo entry.

    The entry is recorded on a clean exit, and only when the lines changed.
    """

    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self.delta = BufferDelta(
            version=buffer.document.version,
            cursor=buffer.cursor,
            label=label,
            changed=False,
        )
        self._span_cm: Optional[ContextManager[object]] = None
        self._before: Sequence[str] = ()
        self._cursor_before: Cursor = buffer.cursor

    def __enter__(self) -> "Transaction":
        self._before = self.buffer.lines
        self._cursor_before = self.buffer.cursor
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component=True,
            metadata={"buffer": self.buffer.name},
        )
        self._span_cm.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        try:
            if exc_type is None:
                after = self.buffer.lines
                changed = tuple(after) != tuple(self._before)
                if changed:
                    self.buffer.undo_history.push(
                        UndoEntry(
                            label=self.label,
                            before=self._before,
                            after=after,
                            cursor_before=self._cursor_before,
                            cursor_after=self.buffer.cursor,
                        )
                    )
                    self.buffer.document.dirty = True
                self.delta = BufferDelta(
                    version=self.buffer.document.version,
                    cursor=self.buffer.cursor,
                    label=self.label,
                    changed=changed,
                )
        finally:
            if self._span_cm is not None:
                self._span_cm.__exit__(exc_type, exc, tb)
        return False


def _is_word_char(char: str) -> bool:
    return not char.isspace()


def _motion_target(lines: Sequence[str], cursor: Cursor, motion: Motion) -> Cursor:
    row, col = cursor
    line = lines[row]
    last_row = len(lines) - 1
    col = clamp_col(line, col)

    if motion == "left":
        if col > 0:
            return (row, col - 1)
        if row > 0:
            return (row - 1, len(lines[row - 1]))
        return (row, col)
    if motion == "right":
        if col < len(line):
            return (row, col + 1)
        if row < last_row:
            return (row + 1, 0)
        return (row, col)
    if motion == "up":
        if row == 0:
            return (row, col)
        return (row - 1, min(col, len(lines[row - 1])))
    if motion == "down":
        if row >= last_row:
            return (row, col)
        return (row + 1, min(col, len(lines[row + 1])))
    if motion == "line_head":
        return (row, 0)
    if motion == "line_end":
        return (row, len(line))
    if motion == "top":
        return (0, 0)
    if motion == "bottom":
        return (last_row, 0)
    if motion == "word_forward":
        return _word_forward(lines, row, col)
    if motion == "word_back":
        return _word_back(lines, row, col)
    raise ValueError(f"Unknown motion '{motion}'")


def _word_forward(lines: Sequence[str], row: int, col: int) -> Cursor:
    line = lines[row]
    while col < len(line) and _is_word_char(line[col]):
        col += 1
    while col < len(line) and not _is_word_char(line[col]):
        col += 1
    if col < len(line) or row == len(lines) - 1:
        return (row, col)
    next_line = lines[row + 1]
    start = len(next_line) - len(next_line.lstrip())
    return (row + 1, start)


def _word_back(lines: Sequence[str], row: int, col: int) -> Cursor:
    if col == 0:
        if row == 0:
            return (0, 0)
        return (row - 1, len(lines[row - 1]))
    line = lines[row]
    while col > 0 and not _is_word_char(line[col - 1]):
        col -= 1
    while col > 0 and _is_word_char(line[col - 1]):
        col -= 1
    return (row, col)
