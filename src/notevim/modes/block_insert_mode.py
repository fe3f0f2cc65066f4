"""Typing into every row of a visual block at once."""

from __future__ import annotations

from typing import Optional

from notevim.buffer.selection import block_insert

from .base_mode import KeyInput, ModeResult
from .keymap_mode import KeymapMode
from .states import BlockInsertState


class BlockInsertMode(KeymapMode):
    """Each typed character lands at ``insert_col`` on rows ``min_row..max_row``.

    Rows shorter than the column are padded with spaces first.
    """

    name = "block_insert"
    state_type = BlockInsertState
    label = "Block Insert"

    def on_exit(self, next_mode: Optional[str]) -> None:
        del next_mode
        self.context.buffer.state.clear_selection()

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        char = key.char
        if char is None:
            return ModeResult(consumed=False, status="miss")
        state = self.state
        buffer = self.context.buffer
        updated = block_insert(
            buffer.lines, state.min_row, state.max_row, state.insert_col, char
        )
        state.insert_col += 1
        buffer.replace_lines(
            updated, (state.min_row, state.insert_col), label="block_insert"
        )
        return ModeResult(consumed=True, status="edit")


__all__ = ["BlockInsertMode"]
