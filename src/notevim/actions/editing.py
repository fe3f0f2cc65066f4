"""Cursor motions and buffer edits bound in Normal and Insert mode."""

from __future__ import annotations

from notevim.buffer import UNNAMED, Motion
from notevim.keymaps import ResolutionMatch
from notevim.modes.base_mode import ModeContext, ModeResult

TAB_WIDTH = 4


def move_cursor(context: ModeContext, match: ResolutionMatch, *, motion: Motion) -> ModeResult:
    del match
    context.buffer.move(motion)
    return ModeResult(consumed=True, status="motion")


def jump_to_top(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.buffer.move("top")
    return ModeResult(consumed=True, status="motion", message="Moved to top")


def delete_char_under_cursor(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    delta = context.buffer.delete_after()
    return ModeResult(consumed=True, status="edit" if delta.changed else "noop")


def yank_line(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.registers.yank_to(UNNAMED, [context.buffer.line()], register_type="line")
    return ModeResult(consumed=True, status="yank", message="Yanked line")


def delete_line(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    removed = context.buffer.delete_line()
    context.registers.yank_to(UNNAMED, [removed], register_type="line")
    return ModeResult(consumed=True, status="edit", message="Deleted line")


def paste_below(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """Paste the register as new lines under the cursor row."""

    del match
    value = context.registers.get()
    if value.is_empty():
        return ModeResult(consumed=True, status="noop", message="Nothing to paste")
    context.buffer.insert_lines_below(value.lines)
    return ModeResult(consumed=True, status="edit")


def undo(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    if context.buffer.undo():
        return ModeResult(consumed=True, status="edit", message="Undone")
    return ModeResult(consumed=True, status="noop", message="Nothing to undo")


def redo(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    if context.buffer.redo():
        return ModeResult(consumed=True, status="edit", message="Redone")
    return ModeResult(consumed=True, status="noop", message="Nothing to redo")


def insert_newline(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.buffer.split_line()
    return ModeResult(consumed=True, status="edit")


def insert_tab(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.buffer.insert_text(" " * TAB_WIDTH)
    return ModeResult(consumed=True, status="edit")


def delete_before_cursor(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    delta = context.buffer.delete_before()
    return ModeResult(consumed=True, status="edit" if delta.changed else "noop")


__all__ = [
    "TAB_WIDTH",
    "delete_before_cursor",
    "delete_char_under_cursor",
    "delete_line",
    "insert_newline",
    "insert_tab",
    "jump_to_top",
    "move_cursor",
    "paste_below",
    "redo",
    "undo",
    "yank_line",
]
