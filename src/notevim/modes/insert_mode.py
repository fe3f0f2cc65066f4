"""Insert mode: typed characters go straight into the buffer."""

from __future__ import annotations

from typing import Optional

from notevim.links import detect_trigger

from .base_mode import KeyInput, ModeResult
from .keymap_mode import KeymapMode
from .states import InsertState


class InsertMode(KeymapMode):
    """Editing keys come from the keymap; everything printable is inserted.

    Typing ``[[`` or ``#`` opens completion for files or tags.
    """

    name = "insert"
    state_type = InsertState
    label = "Insert"

    def initial_state(self, previous: Optional[str]) -> InsertState:
        del previous
        return InsertState()

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        char = key.char
        if char is None:
            return ModeResult(consumed=False, status="miss")
        buffer = self.context.buffer
        buffer.insert_char(char)
        session = self.context.session
        if session is None:
            return ModeResult(consumed=True, status="edit")
        row, col = buffer.cursor
        kind = detect_trigger(buffer.line(row), col)
        if kind is None:
            return ModeResult(consumed=True, status="edit")
        return ModeResult(
            consumed=True,
            switch_to="complete",
            status="completion_start",
            message=f"Completing {kind}",
            payload=session.begin_completion(kind),
        )


__all__ = ["InsertMode"]
