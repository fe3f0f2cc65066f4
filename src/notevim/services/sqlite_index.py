"""Link, tag and completion queries over the scanner's SQLite database."""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Any, List, Optional, Sequence

from notevim.errors import IndexBackendError
from notevim.runtime import telemetry

from .protocols import Backlink, SearchHit, SearchKind, SuggestionKind

SCHEMA = (
    """CREATE TABLE IF NOT EXISTS folders (
        id INTEGER PRIMARY KEY,
        path TEXT UNIQUE
    )""",
    """CREATE TABLE IF NOT EXISTS files (
        id INTEGER PRIMARY KEY,
        path TEXT UNIQUE,
        file_name TEXT,
        folder_id INTEGER,
        metadata TEXT DEFAULT '{}',
        FOREIGN KEY(folder_id) REFERENCES folders(id) ON DELETE CASCADE
    )""",
    """CREATE TABLE IF NOT EXISTS tags (
        id INTEGER PRIMARY KEY,
        tag TEXT UNIQUE
    )""",
    """CREATE TABLE IF NOT EXISTS file_tags (
        file_id INTEGER,
        tag_id INTEGER,
        FOREIGN KEY(file_id) REFERENCES files(id) ON DELETE CASCADE,
        FOREIGN KEY(tag_id) REFERENCES tags(id),
        UNIQUE(file_id, tag_id)
    )""",
    """CREATE TABLE IF NOT EXISTS backlinks (
        id INTEGER PRIMARY KEY,
        backlink TEXT,
        backlink_id INTEGER,
        file_id INTEGER,
        FOREIGN KEY(file_id) REFERENCES files(id) ON DELETE CASCADE,
        FOREIGN KEY(backlink_id) REFERENCES files(id) ON DELETE CASCADE,
        UNIQUE(backlink_id, file_id, backlink)
    )""",
)

_BACKLINKS_FOR = """
    SELECT DISTINCT b.backlink, f.path
    FROM backlinks b
    JOIN files f ON b.backlink_id = f.id
    JOIN files cur ON b.file_id = cur.id
    WHERE cur.path = ?
"""

_SEARCH_BACKLINKS = """
    SELECT DISTINCT f.file_name, f.path
    FROM backlinks b
    JOIN files f ON b.file_id = f.id
    JOIN files fp ON b.backlink_id = fp.id
    WHERE fp.file_name LIKE ? AND f.path != ?
"""

_FILES_FOR_TAG = """
    SELECT f.file_name, f.path
    FROM files f
    JOIN file_tags ft ON f.id = ft.file_id
    JOIN tags t ON ft.tag_id = t.id
    WHERE t.tag = ?
"""

_SUGGEST_FILES = """
    SELECT DISTINCT result FROM (
        SELECT file_name AS result FROM files WHERE file_name LIKE ?
        UNION
        SELECT backlink AS result FROM backlinks WHERE backlink LIKE ?
    ) LIMIT ?
"""


def ensure_schema(path: Path | str) -> bool:
    """Create the index tables when the database file is missing.

    Returns ``True`` when a new database was created.
    """

    db_path = Path(path)
    if db_path.exists():
        return False
    try:
        connection = sqlite3.connect(db_path)
        try:
            for statement in SCHEMA:
                connection.execute(statement)
            connection.commit()
        finally:
            connection.close()
    except sqlite3.Error as exc:
        raise IndexBackendError(f"Cannot create index database: {exc}") from exc
    telemetry.record_event("index.schema_created", data={"path": str(db_path)})
    return True


def _pattern(query: str) -> str:
    return f"%{query}%" if query else "%"


class SqliteIndex:
    """Read-only view of the index maintained by the external scanner.

    Implements both the link/tag index and the completion provider.
    """

    def __init__(self, path: Path | str, *, connection: Optional[sqlite3.Connection] = None) -> None:
        self.path = Path(path)
        try:
            self._connection = connection or sqlite3.connect(self.path)
            self._connection.execute("PRAGMA foreign_keys = ON")
        except sqlite3.Error as exc:
            raise IndexBackendError(f"Cannot open index {self.path}: {exc}") from exc

    def close(self) -> None:
        self._connection.close()

    def _rows(self, sql: str, params: Sequence[Any], *, query: str) -> List[tuple]:
        with telemetry.span(
            f"index::{query}", component="index", metadata={"db": self.path.name}
        ) as handle:
            try:
                rows = self._connection.execute(sql, tuple(params)).fetchall()
            except sqlite3.Error as exc:
                raise IndexBackendError(f"Index query '{query}' failed: {exc}") from exc
            handle.add_metadata("rows", len(rows))
        return rows

    def resolve_link(self, text: str) -> Optional[str]:
        """Map a wikilink to a document by base name, adding ``.md`` if absent."""

        name = Path(text).name or text
        if not name.endswith(".md"):
            name = f"{name}.md"
        rows = self._rows(
            "SELECT path FROM files WHERE file_name = ? ORDER BY id LIMIT 1",
            (name,),
            query="resolve_link",
        )
        return rows[0][0] if rows else None

    def file_name(self, identity: str) -> Optional[str]:
        rows = self._rows(
            "SELECT file_name FROM files WHERE path = ?", (identity,), query="file_name"
        )
        return rows[0][0] if rows else None

    def tags_for(self, identity: str) -> List[str]:
        rows = self._rows(
            """SELECT t.tag FROM tags t
               JOIN file_tags ft ON t.id = ft.tag_id
               JOIN files f ON ft.file_id = f.id
               WHERE f.path = ?""",
            (identity,),
            query="tags_for",
        )
        return [row[0] for row in rows]

    def backlinks_for(self, identity: str) -> List[Backlink]:
        rows = self._rows(_BACKLINKS_FOR, (identity,), query="backlinks_for")
        return [Backlink(text=row[0], identity=row[1]) for row in rows]

    def search(
        self, query: str, kind: SearchKind, *, exclude: Optional[str] = None
    ) -> List[SearchHit]:
        if kind == "backlinks":
            rows = self._rows(
                _SEARCH_BACKLINKS, (_pattern(query), exclude or ""), query="search_backlinks"
            )
            return [SearchHit(label=row[0], identity=row[1]) for row in rows]
        if kind == "tags":
            rows = self._rows(
                "SELECT DISTINCT tag FROM tags WHERE tag LIKE ?",
                (_pattern(query),),
                query="search_tags",
            )
            return [SearchHit(label=row[0]) for row in rows]
        if kind == "files":
            rows = self._rows(
                "SELECT file_name, path FROM files WHERE file_name LIKE ?",
                (_pattern(query),),
                query="search_files",
            )
            return [SearchHit(label=row[0], identity=row[1]) for row in rows]
        raise ValueError(f"Unknown search kind '{kind}'")

    def files_for_tag(self, tag: str) -> List[SearchHit]:
        rows = self._rows(_FILES_FOR_TAG, (tag,), query="files_for_tag")
        return [SearchHit(label=row[0], identity=row[1]) for row in rows]

    def suggest(self, prefix: str, kind: SuggestionKind, *, limit: int = 10) -> List[str]:
        pattern = _pattern(prefix)
        if kind == "file":
            rows = self._rows(_SUGGEST_FILES, (pattern, pattern, limit), query="suggest_files")
        else:
            rows = self._rows(
                "SELECT tag FROM tags WHERE tag LIKE ? LIMIT ?",
                (pattern, limit),
                query="suggest_tags",
            )
        return [row[0] for row in rows]


__all__ = ["SCHEMA", "SqliteIndex", "ensure_schema"]
