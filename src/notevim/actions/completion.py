"""Actions bound while a wikilink or tag completion popup is open."""

from __future__ import annotations

from notevim.keymaps import ResolutionMatch
from notevim.links import format_completion, trigger_start
from notevim.modes.base_mode import ModeContext, ModeResult, require_session, require_state
from notevim.modes.states import CompletionState, move_index


def _back_to_insert(status: str = "ok") -> ModeResult:
    return ModeResult(consumed=True, switch_to="insert", status=status, message="Insert")


def cancel_completion(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del context, match
    return _back_to_insert()


def accept_completion(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """Replace trigger and query with the highlighted suggestion."""

    del match
    state = require_state(context, CompletionState)
    suggestion = state.current
    if suggestion is None:
        return _back_to_insert()
    buffer = context.buffer
    row, col = buffer.cursor
    line = buffer.line(row)
    start = trigger_start(line, col, state.kind)
    if start is None:
        start = max(0, col - len(state.query) - len(state.trigger))
    text = format_completion(suggestion, state.kind)
    buffer.replace_line(row, line[:start] + text + line[col:])
    buffer.set_cursor(row, start + len(text))
    context.bus.emit("completion.accept", {"kind": state.kind, "suggestion": suggestion})
    return _back_to_insert("completion_accept")


def completion_up(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    state = require_state(context, CompletionState)
    state.selected = move_index(state.selected, -1, len(state.suggestions))
    return ModeResult(consumed=True, status="completion_select")


def completion_down(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    state = require_state(context, CompletionState)
    state.selected = move_index(state.selected, 1, len(state.suggestions))
    return ModeResult(consumed=True, status="completion_select")


def completion_backspace(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """Erase before the cursor; closes the popup once the trigger itself is gone."""

    del match
    state = require_state(context, CompletionState)
    buffer = context.buffer
    buffer.delete_before()
    row, col = buffer.cursor
    if state.trigger not in buffer.line(row)[:col]:
        return _back_to_insert("completion_cancel")
    require_session(context).refresh_completion(state)
    return ModeResult(consumed=True, status="completion_query")


__all__ = [
    "accept_completion",
    "cancel_completion",
    "completion_backspace",
    "completion_down",
    "completion_up",
]
