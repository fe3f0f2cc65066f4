"""Actions that move between documents or open list-driven modes."""

from __future__ import annotations

from notevim.keymaps import ResolutionMatch
from notevim.modes.base_mode import ModeContext, ModeResult, require_session
from notevim.modes.states import FileTreeState
from notevim.services.protocols import SearchKind

_DAILY_LABELS = {0: "today's", -1: "yesterday's", 1: "tomorrow's"}


def history_back(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    moved, message = require_session(context).navigate_back()
    return ModeResult(consumed=True, status="navigate" if moved else "noop", message=message)


def history_forward(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    moved, message = require_session(context).navigate_forward()
    return ModeResult(consumed=True, status="navigate" if moved else "noop", message=message)


def follow_link(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    message = require_session(context).follow_link()
    return ModeResult(consumed=True, status="navigate", message=message)


def start_search(
    context: ModeContext, match: ResolutionMatch, *, kind: SearchKind
) -> ModeResult:
    del match
    state = require_session(context).begin_search(kind)
    return ModeResult(
        consumed=True,
        switch_to="search",
        message=f"Started {kind} search",
        payload=state,
    )


def open_daily_note(
    context: ModeContext, match: ResolutionMatch, *, offset_days: int
) -> ModeResult:
    del match
    require_session(context).open_daily_note(offset_days)
    label = _DAILY_LABELS.get(offset_days, f"{offset_days:+d} day")
    return ModeResult(consumed=True, status="navigate", message=f"Opened {label} file")


def enter_file_tree(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    tree = require_session(context).file_tree
    if not tree.loaded:
        tree.build()
    if tree.items and tree.selected is None:
        tree.select(0)
    return ModeResult(
        consumed=True,
        switch_to="file_tree",
        message="Entered File Tree mode",
        payload=FileTreeState(),
    )


__all__ = [
    "enter_file_tree",
    "follow_link",
    "history_back",
    "history_forward",
    "open_daily_note",
    "start_search",
]
