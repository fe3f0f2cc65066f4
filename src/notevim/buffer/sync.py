"""Boundary types exchanged with host adapters."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .state import Cursor, Selection


@dataclass(slots=True)
class BufferMirror:
    """Render-ready snapshot of a buffer."""

    text: str
    cursor: Cursor
    selection: Optional[Selection]
    cursor_byte: int = 0
    attributes: dict[str, str] = field(default_factory=dict)


class BufferValidationError(RuntimeError):
    """Raised when a caller hands the buffer an out-of-range cursor."""

    def __init__(self, message: str, *, cursor: Cursor | None = None) -> None:
        super().__init__(message)
        self.cursor = cursor
