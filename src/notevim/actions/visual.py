"""Actions dedicated to Visual and Visual Block selections."""

from __future__ import annotations

from notevim.buffer import UNNAMED, Motion
from notevim.buffer.selection import (
    SelectionRect,
    block_delete,
    block_erase,
    block_yank,
    char_delete,
    char_yank,
)
from notevim.keymaps import ResolutionMatch
from notevim.modes.base_mode import ModeContext, ModeResult, require_state
from notevim.modes.states import BlockInsertState, VisualState


def _rect(context: ModeContext, state: VisualState) -> SelectionRect:
    return SelectionRect.from_points(state.anchor, context.buffer.cursor)


def extend_selection(
    context: ModeContext, match: ResolutionMatch, *, motion: Motion
) -> ModeResult:
    """Move the live cursor; the anchor stays where the selection began."""

    del match
    state = require_state(context, VisualState)
    cursor = context.buffer.move(motion)
    context.buffer.state.set_selection(state.anchor, cursor)
    context.bus.emit("visual.selection", {"anchor": state.anchor, "cursor": cursor})
    return ModeResult(consumed=True, status="visual_select")


def yank_selection(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    state = require_state(context, VisualState)
    lines = context.buffer.lines
    if state.block:
        yanked = block_yank(lines, _rect(context, state))
        register_type = "block"
    else:
        yanked = char_yank(lines, state.anchor, context.buffer.cursor)
        register_type = "character"
    context.registers.yank_to(UNNAMED, yanked, register_type=register_type)
    context.bus.emit("visual.yank", {"lines": tuple(yanked), "block": state.block})
    return ModeResult(
        consumed=True, switch_to="normal", status="visual_yank", message="Yanked"
    )


def delete_selection(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    state = require_state(context, VisualState)
    buffer = context.buffer
    lines = buffer.lines
    if state.block:
        rect = _rect(context, state)
        removed = block_yank(lines, rect)
        updated, cursor = block_delete(lines, rect)
        register_type = "block"
    else:
        removed = char_yank(lines, state.anchor, buffer.cursor)
        updated, cursor = char_delete(lines, state.anchor, buffer.cursor)
        register_type = "character"
    context.registers.yank_to(UNNAMED, removed, register_type=register_type)
    buffer.replace_lines(updated, cursor, label="visual_delete")
    return ModeResult(
        consumed=True, switch_to="normal", status="visual_delete", message="Deleted"
    )


def _enter_block_insert(context: ModeContext, *, after: bool) -> ModeResult:
    state = require_state(context, VisualState)
    if not state.block:
        return ModeResult(consumed=True, status="noop")
    rect = _rect(context, state)
    column = rect.max_col + 1 if after else rect.min_col
    context.buffer.set_cursor(rect.min_row, column)
    payload = BlockInsertState(
        min_row=rect.min_row,
        max_row=rect.max_row,
        insert_col=column,
        original_col=column,
    )
    return ModeResult(
        consumed=True,
        switch_to="block_insert",
        message="Block Insert After" if after else "Block Insert Before",
        payload=payload,
    )


def block_insert_before(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _enter_block_insert(context, after=False)


def block_insert_after(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _enter_block_insert(context, after=True)


def block_insert_erase(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """Remove the last typed column; never moves left of where insertion began."""

    del match
    state = require_state(context, BlockInsertState)
    if state.insert_col <= state.original_col:
        return ModeResult(consumed=True, status="noop")
    state.insert_col -= 1
    updated = block_erase(
        context.buffer.lines, state.min_row, state.max_row, state.insert_col
    )
    context.buffer.replace_lines(
        updated, (state.min_row, state.insert_col), label="block_erase"
    )
    return ModeResult(consumed=True, status="edit")


def leave_block_insert(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, switch_to="normal", message="Normal")


__all__ = [
    "block_insert_after",
    "block_insert_before",
    "block_insert_erase",
    "leave_block_insert",
    "delete_selection",
    "extend_selection",
    "yank_selection",
]
