"""Character/byte coordinate translation.

Cursor columns are character offsets. Hosts that address text by UTF-8 byte
offsets convert through these helpers; every helper clamps instead of
raising, so a column past the end of a line maps to the full line length.
Offsets must be recomputed after each mutation.
"""

from __future__ import annotations

ENCODING = "utf-8"


def byte_length(line: str) -> int:
    return len(line.encode(ENCODING))


def clamp_col(line: str, col: int) -> int:
    if col < 0:
        return 0
    return min(col, len(line))


def byte_offset(line: str, col: int) -> int:
    """Byte offset of character ``col``; the full byte length when past the end."""

    if col >= len(line):
        return byte_length(line)
    offset = 0
    for index, char in enumerate(line):
        if index == col:
            return offset
        offset += len(char.encode(ENCODING))
    return offset


def char_offset(line: str, byte_index: int) -> int:
    """Character index of the boundary at or before ``byte_index``."""

    if byte_index <= 0:
        return 0
    offset = 0
    for index, char in enumerate(line):
        offset += len(char.encode(ENCODING))
        if offset > byte_index:
            return index
    return len(line)


def char_slice(line: str, start: int, end: int) -> str:
    """``line[start:end]`` in characters, clamped to the line."""

    start = clamp_col(line, start)
    end = clamp_col(line, end)
    if end <= start:
        return ""
    return line[start:end]


def splice(line: str, start: int, end: int, text: str = "") -> str:
    """Replace the clamped character range ``[start, end)`` with ``text``."""

    start = clamp_col(line, start)
    end = max(start, clamp_col(line, end))
    return line[:start] + text + line[end:]


__all__ = [
    "byte_length",
    "byte_offset",
    "char_offset",
    "char_slice",
    "clamp_col",
    "splice",
]
