"""Core action implementations shared across modes."""

from __future__ import annotations

from notevim.keymaps import ResolutionMatch
from notevim.modes.base_mode import ModeContext, ModeResult
from notevim.modes.states import CommandState, VisualState


def enter_insert_mode(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, switch_to="insert", message="Insert")


def append_after_cursor(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.buffer.move("right")
    return ModeResult(consumed=True, switch_to="insert", message="Insert")


def open_line_below(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.buffer.move("line_end")
    context.buffer.split_line()
    return ModeResult(consumed=True, switch_to="insert", message="Insert")


def exit_to_normal_mode(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, switch_to="normal", message="Normal")


def enter_visual_mode(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    state = VisualState(anchor=context.buffer.cursor, block=False)
    return ModeResult(consumed=True, switch_to="visual", message="Visual", payload=state)


def enter_visual_block_mode(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    state = VisualState(anchor=context.buffer.cursor, block=True)
    return ModeResult(
        consumed=True, switch_to="visual_block", message="Visual Block", payload=state
    )


def enter_command_mode(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del context, match
    return ModeResult(
        consumed=True,
        switch_to="command",
        message="Command",
        payload=CommandState(text="", return_to="normal"),
    )


def noop_action(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, status="noop")


__all__ = [
    "append_after_cursor",
    "enter_command_mode",
    "enter_insert_mode",
    "enter_visual_block_mode",
    "enter_visual_mode",
    "exit_to_normal_mode",
    "noop_action",
    "open_line_below",
]
