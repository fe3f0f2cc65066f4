"""Character-wise and block-wise visual selection."""

from __future__ import annotations

from typing import Optional

from .base_mode import KeyInput, ModeResult
from .keymap_mode import KeymapMode
from .states import VisualState


class VisualMode(KeymapMode):
    """Anchor stays put while motions move the cursor.

    The buffer's selection mirrors ``anchor``/cursor for renderers and is
    cleared when the mode exits, except when the block is handed on to
    block insert.
    """

    name = "visual"
    state_type = VisualState
    label = "Visual"
    block = False

    def initial_state(self, previous: Optional[str]) -> VisualState:
        del previous
        return VisualState(anchor=self.context.buffer.cursor, block=self.block)

    def on_enter(self, previous: Optional[str]) -> None:
        del previous
        buffer = self.context.buffer
        buffer.state.set_selection(self.state.anchor, buffer.cursor)

    def on_exit(self, next_mode: Optional[str]) -> None:
        if next_mode != "block_insert":
            self.context.buffer.state.clear_selection()

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        del key
        return ModeResult(consumed=True, status="noop")


class VisualBlockMode(VisualMode):
    name = "visual_block"
    label = "Visual Block"
    block = True


__all__ = ["VisualBlockMode", "VisualMode"]
