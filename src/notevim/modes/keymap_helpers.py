"""Helper utilities for keymap-driven modes."""

from __future__ import annotations

from notevim.keymaps import KeymapResolver, KeyStroke

from .base_mode import KeyInput, ModeContext


def key_to_token(key: KeyInput) -> str:
    modifiers = tuple(key.modifiers)
    if len(key.key) == 1:
        # Shift is already folded into the character itself.
        modifiers = tuple(m for m in modifiers if m.lower() != "shift")
    return KeyStroke(key.key, modifiers).token


def require_keymap_resolver(context: ModeContext) -> KeymapResolver:
    resolver = context.extras.get("keymap_resolver")
    if not isinstance(resolver, KeymapResolver):
        raise RuntimeError("ModeContext.extras missing 'keymap_resolver'")
    return resolver


__all__ = [
    "key_to_token",
    "require_keymap_resolver",
]
