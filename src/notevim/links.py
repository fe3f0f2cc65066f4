"""Pure helpers for wikilinks, tags and completion triggers in a line of text."""

from __future__ import annotations

from pathlib import PurePath
from typing import Dict, Iterable, List, Optional

from notevim.services.protocols import Backlink, SuggestionKind

TRIGGERS: Dict[str, str] = {"file": "[[", "tag": "#"}


def extract_wikilink(line: str) -> Optional[str]:
    """Text of the first complete ``[[target]]`` in ``line``."""

    start = line.find("[[")
    if start < 0:
        return None
    end = line.find("]]", start + 2)
    if end < 0:
        return None
    return line[start + 2 : end]


def strip_incomplete_link(line: str) -> str:
    """Drop everything from the last ``[[`` when the line has no ``]]``."""

    if "[[" in line and "]]" not in line:
        return line[: line.rfind("[[")]
    return line


def dedupe_backlinks(backlinks: Iterable[Backlink]) -> List[Backlink]:
    """Keep one entry per link text, preferring the target with the shortest base name.

    Order follows the first appearance of each text; on equal base-name
    length the earlier entry wins.
    """

    chosen: Dict[str, Backlink] = {}
    for backlink in backlinks:
        existing = chosen.get(backlink.text)
        if existing is None:
            chosen[backlink.text] = backlink
        elif len(PurePath(backlink.identity).name) < len(PurePath(existing.identity).name):
            chosen[backlink.text] = backlink
    return list(chosen.values())


def detect_trigger(line: str, col: int) -> Optional[SuggestionKind]:
    """Completion kind whose trigger ends exactly at ``col``."""

    before = line[:col]
    if before.endswith(TRIGGERS["file"]):
        return "file"
    if before.endswith(TRIGGERS["tag"]):
        return "tag"
    return None


def trigger_start(line: str, col: int, kind: SuggestionKind) -> Optional[int]:
    """Column of the last trigger of ``kind`` before ``col``, if any."""

    position = line[:col].rfind(TRIGGERS[kind])
    return None if position < 0 else position


def completion_query(line: str, col: int, kind: SuggestionKind) -> Optional[str]:
    """Text typed between the trigger and the cursor, or ``None`` without a trigger."""

    start = trigger_start(line, col, kind)
    if start is None:
        return None
    return line[start + len(TRIGGERS[kind]) : col]


def format_completion(suggestion: str, kind: SuggestionKind) -> str:
    return f"[[{suggestion}]]" if kind == "file" else f"#{suggestion}"


__all__ = [
    "TRIGGERS",
    "completion_query",
    "dedupe_backlinks",
    "detect_trigger",
    "extract_wikilink",
    "format_completion",
    "strip_incomplete_link",
    "trigger_start",
]
