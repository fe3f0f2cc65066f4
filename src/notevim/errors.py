"""Recoverable editor errors.

Anything derived from :class:`EditorError` is reported to the user as a
status message by the mode manager; the session keeps its current mode.
"""

from __future__ import annotations

from typing import Optional


class EditorError(RuntimeError):
    """Base class for failures surfaced as status messages."""


class DocumentIOError(EditorError):
    """Reading, writing, renaming or deleting a document failed."""

    def __init__(self, message: str, *, identity: Optional[str] = None) -> None:
        super().__init__(message)
        self.identity = identity


class IndexBackendError(EditorError):
    """The link/tag index could not answer a query."""


class ScannerError(EditorError):
    """The external indexer exited with a non-zero status."""

    def __init__(self, stderr: str, *, returncode: Optional[int] = None) -> None:
        super().__init__(f"Markdown scanner error: {stderr.strip()}")
        self.stderr = stderr
        self.returncode = returncode


class InvalidLinkError(EditorError):
    """No wikilink could be followed from the cursor line."""


class InvalidPathError(EditorError):
    """A base directory or file-tree target is unusable."""


__all__ = [
    "EditorError",
    "DocumentIOError",
    "IndexBackendError",
    "ScannerError",
    "InvalidLinkError",
    "InvalidPathError",
]
