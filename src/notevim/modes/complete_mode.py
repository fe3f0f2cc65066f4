"""Completion popup for wikilinks and tags, layered over insert mode."""

from __future__ import annotations

from .base_mode import KeyInput, ModeResult, require_session
from .keymap_mode import KeymapMode
from .states import CompletionState


class CompleteMode(KeymapMode):
    name = "complete"
    state_type = CompletionState
    label = "Complete"

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        char = key.char
        if char is None:
            return ModeResult(consumed=False, status="miss")
        self.context.buffer.insert_char(char)
        require_session(self.context).refresh_completion(self.state)
        return ModeResult(consumed=True, status="completion_query")


__all__ = ["CompleteMode"]
