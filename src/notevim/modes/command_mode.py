"""Command-line mode with inline editing and keymap integration."""

from __future__ import annotations

from typing import Optional

from .base_mode import KeyInput, ModeResult
from .keymap_mode import KeymapMode
from .states import CommandState


class CommandMode(KeymapMode):
    """Collects a command line; Enter and Escape are keymap actions.

    The state remembers which mode opened the command line so both
    submitting and cancelling can return there.
    """

    name = "command"
    state_type = CommandState
    label = "Command"

    def initial_state(self, previous: Optional[str]) -> CommandState:
        return CommandState(text="", return_to=previous or "normal")

    def on_enter(self, previous: Optional[str]) -> None:
        del previous
        self.context.bus.emit("command.start", self.state.text)

    def on_exit(self, next_mode: Optional[str]) -> None:
        del next_mode
        self.context.bus.emit("command.end", self.state.text)

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        char = key.char
        if char is None:
            return ModeResult(consumed=False, status="miss", message="unhandled")
        self.state.text += char
        return ModeResult(consumed=True, status="editing")


__all__ = ["CommandMode"]
