"""Collaborator contracts the editing session is constructed with.

Identities are opaque strings; the bundled implementations use absolute
file paths.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Literal, Optional, Protocol

SearchKind = Literal["backlinks", "tags", "files"]
SuggestionKind = Literal["file", "tag"]


@dataclass(frozen=True, slots=True)
class SearchHit:
    """A search row; tag results carry no identity."""

    label: str
    identity: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Backlink:
    """Link text found in a document together with the document it targets."""

    text: str
    identity: str


@dataclass(frozen=True, slots=True)
class WorkspaceEntry:
    name: str
    path: str
    is_dir: bool
    modified: float = 0.0


class DocumentStore(Protocol):
    def load(self, identity: str) -> str: ...

    def save(self, identity: str, content: str) -> None: ...

    def exists(self, identity: str) -> bool: ...

    def create(self, identity: str) -> None: ...


class LinkIndex(Protocol):
    def resolve_link(self, text: str) -> Optional[str]: ...

    def tags_for(self, identity: str) -> List[str]: ...

    def backlinks_for(self, identity: str) -> List[Backlink]: ...

    def search(
        self, query: str, kind: SearchKind, *, exclude: Optional[str] = None
    ) -> List[SearchHit]: ...

    def files_for_tag(self, tag: str) -> List[SearchHit]: ...

    def file_name(self, identity: str) -> Optional[str]: ...


class CompletionProvider(Protocol):
    def suggest(self, prefix: str, kind: SuggestionKind, *, limit: int = 10) -> List[str]: ...


class Indexer(Protocol):
    """External re-indexing; failures raise ``ScannerError``."""

    def index(self, path: str) -> None: ...

    def remove(self, path: str) -> None: ...


class Workspace(Protocol):
    """Filesystem view used by the file tree; paths are base-relative."""

    base_dir: Path

    def list_entries(self, path: str) -> List[WorkspaceEntry]: ...

    def absolute(self, path: str) -> Path: ...

    def exists(self, path: str) -> bool: ...

    def create_file(self, path: str) -> None: ...

    def delete_file(self, path: str) -> None: ...

    def move(self, source: str, target: str) -> None: ...

    def copy(self, source: str, target: str) -> None: ...


__all__ = [
    "Backlink",
    "CompletionProvider",
    "DocumentStore",
    "Indexer",
    "LinkIndex",
    "SearchHit",
    "SearchKind",
    "SuggestionKind",
    "Workspace",
    "WorkspaceEntry",
]
