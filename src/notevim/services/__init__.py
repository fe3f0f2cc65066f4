"""Collaborators the editing session talks to: documents, index, scanner."""

from .files import FileDocumentStore, FileWorkspace
from .protocols import (
    Backlink,
    CompletionProvider,
    DocumentStore,
    Indexer,
    LinkIndex,
    SearchHit,
    SearchKind,
    SuggestionKind,
    Workspace,
    WorkspaceEntry,
)
from .scanner import ScannerIndexer
from .sqlite_index import SqliteIndex, ensure_schema

__all__ = [
    "Backlink",
    "CompletionProvider",
    "DocumentStore",
    "FileDocumentStore",
    "FileWorkspace",
    "Indexer",
    "LinkIndex",
    "ScannerIndexer",
    "SearchHit",
    "SearchKind",
    "SqliteIndex",
    "SuggestionKind",
    "Workspace",
    "WorkspaceEntry",
    "ensure_schema",
]
