"""Per-mode state, one dataclass per mode.

The active mode's state lives in ``ModeContext.state`` and is replaced on
every transition, so data such as a selection anchor only exists while the
mode that owns it is active.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from notevim.buffer.state import Cursor
from notevim.links import TRIGGERS
from notevim.services.protocols import SearchHit, SearchKind, SuggestionKind

CompletionKind = SuggestionKind


@dataclass(slots=True)
class NormalState:
    prefix: Tuple[str, ...] = ()


@dataclass(slots=True)
class InsertState:
    pass


@dataclass(slots=True)
class CompletionState:
    kind: CompletionKind
    query: str = ""
    suggestions: List[str] = field(default_factory=list)
    selected: Optional[int] = None

    @property
    def trigger(self) -> str:
        return TRIGGERS[self.kind]

    @property
    def current(self) -> Optional[str]:
        if self.selected is None or not self.suggestions:
            return None
        return self.suggestions[self.selected]


@dataclass(slots=True)
class SearchState:
    kind: SearchKind
    query: str = ""
    target: Optional[str] = None
    results: List[SearchHit] = field(default_factory=list)
    selected: Optional[int] = None

    @property
    def current(self) -> Optional[SearchHit]:
        if self.selected is None or not self.results:
            return None
        return self.results[self.selected]


@dataclass(slots=True)
class TagFilesState:
    tag: str
    files: List[SearchHit] = field(default_factory=list)
    selected: int = 0


@dataclass(slots=True)
class VisualState:
    anchor: Cursor
    block: bool = False


@dataclass(slots=True)
class BlockInsertState:
    """Rows of the block being edited and the shared insertion column."""

    min_row: int
    max_row: int
    insert_col: int
    original_col: int


@dataclass(slots=True)
class CommandState:
    text: str = ""
    return_to: str = "normal"


@dataclass(slots=True)
class FileTreeState:
    prefix: Tuple[str, ...] = ()


@dataclass(slots=True)
class FileTreeVisualState:
    anchor: int = 0


ModeState = Union[
    NormalState,
    InsertState,
    CompletionState,
    SearchState,
    TagFilesState,
    VisualState,
    BlockInsertState,
    CommandState,
    FileTreeState,
    FileTreeVisualState,
]


def move_index(current: Optional[int], delta: int, length: int) -> Optional[int]:
    """Step a list selection by ``delta`` without wrapping."""

    if length == 0:
        return None
    start = 0 if current is None else current
    return max(0, min(start + delta, length - 1))


__all__ = [
    "TRIGGERS",
    "BlockInsertState",
    "CommandState",
    "CompletionKind",
    "CompletionState",
    "FileTreeState",
    "FileTreeVisualState",
    "InsertState",
    "ModeState",
    "NormalState",
    "SearchState",
    "TagFilesState",
    "VisualState",
    "move_index",
]
