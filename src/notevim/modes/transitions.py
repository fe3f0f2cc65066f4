"""Explicit table of the mode transitions the editor allows."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional

ALLOWED_TRANSITIONS: Mapping[str, frozenset[str]] = MappingProxyType(
    {
        "normal": frozenset(
            {"insert", "visual", "visual_block", "command", "search", "file_tree"}
        ),
        "insert": frozenset({"normal", "complete"}),
        "complete": frozenset({"insert"}),
        "command": frozenset({"normal", "file_tree", "file_tree_visual"}),
        "search": frozenset({"normal", "tag_files"}),
        "tag_files": frozenset({"normal"}),
        "visual": frozenset({"normal"}),
        "visual_block": frozenset({"normal", "block_insert"}),
        "block_insert": frozenset({"normal"}),
        "file_tree": frozenset({"normal", "command", "file_tree_visual"}),
        "file_tree_visual": frozenset({"file_tree", "command"}),
    }
)


class InvalidTransitionError(RuntimeError):
    """Raised when a mode asks to switch somewhere the table forbids."""

    def __init__(self, source: Optional[str], target: str) -> None:
        super().__init__(f"Transition '{source}' -> '{target}' is not allowed")
        self.source = source
        self.target = target


def is_allowed(
    source: Optional[str],
    target: str,
    table: Mapping[str, frozenset[str]] = ALLOWED_TRANSITIONS,
) -> bool:
    if source is None or source == target:
        return True
    return target in table.get(source, frozenset())


def ensure_transition(
    source: Optional[str],
    target: str,
    table: Mapping[str, frozenset[str]] = ALLOWED_TRANSITIONS,
) -> None:
    if not is_allowed(source, target, table):
        raise InvalidTransitionError(source, target)


__all__ = [
    "ALLOWED_TRANSITIONS",
    "InvalidTransitionError",
    "ensure_transition",
    "is_allowed",
]
