"""Buffer abstractions and undo/redo data structures."""

from .buffer import Buffer, BufferDelta, Transaction
from .document import BufferDocument
from .registers import UNNAMED, RegisterBank, RegisterValue
from .selection import SelectionRect
from .state import MOTIONS, BufferState, Cursor, Motion
from .sync import BufferMirror, BufferValidationError
from .undo import UndoEntry, UndoTimeline
from .validation import clamp_cursor, ensure_cursor

__all__ = [
    "BufferDocument",
    "BufferState",
    "Cursor",
    "Motion",
    "MOTIONS",
    "RegisterBank",
    "RegisterValue",
    "UNNAMED",
    "SelectionRect",
    "UndoTimeline",
    "UndoEntry",
    "Buffer",
    "BufferDelta",
    "Transaction",
    "BufferMirror",
    "BufferValidationError",
    "clamp_cursor",
    "ensure_cursor",
]
