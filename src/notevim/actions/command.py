"""Actions that edit and evaluate the command line."""

from __future__ import annotations

from functools import partial
from typing import Callable, Dict

from notevim.keymaps import ResolutionMatch
from notevim.modes.base_mode import ModeContext, ModeResult, require_session, require_state
from notevim.modes.states import CommandState

CommandHandler = Callable[[ModeContext, str], str]


def submit_command_line(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """Run the typed command and go back to the mode Command was opened from.

    A failing handler raises; the manager reports the error and Command mode
    stays active with its text intact.
    """

    del match
    state = require_state(context, CommandState)
    text = state.text.strip()
    context.bus.emit("command.submit", text)
    name, _, argument = text.partition(" ")
    handler = _COMMAND_HANDLERS.get(name)
    if handler is None:
        message = f"Unknown command: {text}"
        context.bus.emit("command.error", text)
        status = "command_error"
    else:
        message = handler(context, argument.strip())
        status = f"command_{name}"
    return ModeResult(
        consumed=True, switch_to=state.return_to, status=status, message=message
    )


def cancel_command(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    state = require_state(context, CommandState)
    return ModeResult(consumed=True, switch_to=state.return_to, message="Normal")


def erase_command_char(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    state = require_state(context, CommandState)
    state.text = state.text[:-1]
    return ModeResult(consumed=True, status="command_edit")


def _handle_write(context: ModeContext, argument: str, *, quit_after: bool = False) -> str:
    del argument
    session = require_session(context)
    message = session.save()
    if quit_after:
        session.request_quit()
    return message


def _handle_quit(context: ModeContext, argument: str) -> str:
    del argument
    require_session(context).request_quit()
    return "Quit"


def _handle_rename(context: ModeContext, argument: str) -> str:
    if not argument:
        return "Rename needs a file name"
    return require_session(context).tree_ops.rename_selected(argument)


def _handle_new(context: ModeContext, argument: str) -> str:
    if not argument:
        return "New needs a file name"
    return require_session(context).tree_ops.create_file(argument)


_COMMAND_HANDLERS: Dict[str, CommandHandler] = {
    "w": _handle_write,
    "q": _handle_quit,
    "wq": partial(_handle_write, quit_after=True),
    "rename": _handle_rename,
    "new": _handle_new,
}


__all__ = ["cancel_command", "erase_command_char", "submit_command_line"]
