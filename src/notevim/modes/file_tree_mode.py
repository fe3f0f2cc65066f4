"""File tree navigation and range selection over the workspace."""

from __future__ import annotations

from typing import Optional

from .base_mode import require_session
from .keymap_mode import KeymapMode, SequenceMode
from .states import FileTreeState, FileTreeVisualState


class FileTreeMode(SequenceMode):
    """Keys drive the tree cursor; sort toggles are two-key sequences."""

    name = "file_tree"
    state_type = FileTreeState
    label = "File Tree"

    def initial_state(self, previous: Optional[str]) -> FileTreeState:
        del previous
        return FileTreeState()

    def on_enter(self, previous: Optional[str]) -> None:
        del previous
        tree = require_session(self.context).file_tree
        if not tree.loaded:
            tree.build()


class FileTreeVisualMode(KeymapMode):
    name = "file_tree_visual"
    state_type = FileTreeVisualState
    label = "File Tree Visual"

    def initial_state(self, previous: Optional[str]) -> FileTreeVisualState:
        # Back from a rename prompt; the tree cursor still marks the range end.
        del previous
        selected = require_session(self.context).file_tree.selected
        return FileTreeVisualState(anchor=selected if selected is not None else 0)


__all__ = ["FileTreeMode", "FileTreeVisualMode"]
