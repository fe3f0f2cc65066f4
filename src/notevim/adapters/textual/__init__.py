"""Textual host for the note editor."""

from .controller import (
    Panel,
    TextualNoteAdapter,
    TextualUIHooks,
    key_from_textual,
    panel_for,
)

__all__ = [
    "Panel",
    "TextualNoteAdapter",
    "TextualUIHooks",
    "key_from_textual",
    "panel_for",
]
