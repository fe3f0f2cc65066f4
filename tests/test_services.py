from __future__ import annotations

import sqlite3
import subprocess
from pathlib import Path

import pytest

from notevim.buffer import Buffer
from notevim.errors import DocumentIOError, IndexBackendError, InvalidPathError, ScannerError
from notevim.services import (
    FileDocumentStore,
    FileWorkspace,
    ScannerIndexer,
    SqliteIndex,
    ensure_schema,
)
from notevim.services.protocols import Backlink, SearchHit


@pytest.fixture
def index_db(tmp_path: Path) -> Path:
    path = tmp_path / "markdown_data.db"
    assert ensure_schema(path) is True
    connection = sqlite3.connect(path)
    connection.executescript(
        """
        INSERT INTO folders (id, path) VALUES (1, '/n'), (2, '/n/sub');
        INSERT INTO files (id, path, file_name, folder_id) VALUES
            (1, '/n/alpha.md', 'alpha.md', 1),
            (2, '/n/beta.md', 'beta.md', 1),
            (3, '/n/sub/alpha.md', 'alpha.md', 2);
        INSERT INTO tags (id, tag) VALUES (1, 'todo'), (2, 'idea');
        INSERT INTO file_tags (file_id, tag_id) VALUES (1, 1), (2, 1), (2, 2);
        INSERT INTO backlinks (backlink, backlink_id, file_id) VALUES
            ('alpha', 1, 2);
        """
    )
    connection.commit()
    connection.close()
    return path


@pytest.fixture
def sqlite_index(index_db: Path):
    index = SqliteIndex(index_db)
    yield index
    index.close()


def test_ensure_schema_only_creates_once(tmp_path: Path) -> None:
    path = tmp_path / "fresh.db"

    assert ensure_schema(path) is True
    assert ensure_schema(path) is False


def test_resolve_link_by_base_name(sqlite_index: SqliteIndex) -> None:
    assert sqlite_index.resolve_link("alpha") == "/n/alpha.md"
    assert sqlite_index.resolve_link("sub/alpha.md") == "/n/alpha.md"
    assert sqlite_index.resolve_link("missing") is None


def test_tags_and_files_for_tag(sqlite_index: SqliteIndex) -> None:
    assert sorted(sqlite_index.tags_for("/n/beta.md")) == ["idea", "todo"]
    assert sorted(sqlite_index.files_for_tag("todo"), key=lambda hit: hit.identity) == [
        SearchHit("alpha.md", "/n/alpha.md"),
        SearchHit("beta.md", "/n/beta.md"),
    ]


def test_backlinks_for_document(sqlite_index: SqliteIndex) -> None:
    assert sqlite_index.backlinks_for("/n/beta.md") == [Backlink("alpha", "/n/alpha.md")]
    assert sqlite_index.backlinks_for("/n/alpha.md") == []


def test_search_kinds(sqlite_index: SqliteIndex) -> None:
    assert sqlite_index.search("alpha.md", "backlinks") == [SearchHit("beta.md", "/n/beta.md")]
    assert sqlite_index.search("alpha.md", "backlinks", exclude="/n/beta.md") == []
    assert sqlite_index.search("to", "tags") == [SearchHit("todo")]
    assert sqlite_index.search("bet", "files") == [SearchHit("beta.md", "/n/beta.md")]
    with pytest.raises(ValueError):
        sqlite_index.search("x", "people")  # type: ignore[arg-type]


def test_suggest_files_and_tags(sqlite_index: SqliteIndex) -> None:
    assert set(sqlite_index.suggest("al", "file")) == {"alpha.md", "alpha"}
    assert sqlite_index.suggest("id", "tag") == ["idea"]
    assert len(sqlite_index.suggest("", "tag", limit=1)) == 1


def test_unusable_connection_raises_backend_error(tmp_path: Path) -> None:
    connection = sqlite3.connect(tmp_path / "closed.db")
    connection.close()

    with pytest.raises(IndexBackendError):
        SqliteIndex(tmp_path / "closed.db", connection=connection)


def test_document_store_round_trip(tmp_path: Path) -> None:
    store = FileDocumentStore()
    identity = str(tmp_path / "deep" / "note.md")

    assert store.load(identity) == ""
    assert store.exists(identity) is False

    store.create(identity)
    store.save(identity, "héllo\n[[link]]")

    assert store.exists(identity) is True
    assert store.load(identity) == "héllo\n[[link]]"


def test_document_store_keeps_line_breaks_through_buffer(tmp_path: Path) -> None:
    store = FileDocumentStore()
    identity = tmp_path / "breaks.md"
    raw = "one\r\ntwo\x0cthree\u2028four\n"
    identity.write_bytes(raw.encode("utf-8"))

    buffer = Buffer.from_text(store.load(str(identity)))
    store.save(str(identity), buffer.to_text())

    assert identity.read_bytes() == raw.encode("utf-8")


def test_document_store_save_failure(tmp_path: Path) -> None:
    store = FileDocumentStore()

    with pytest.raises(DocumentIOError) as excinfo:
        store.save(str(tmp_path / "missing" / "note.md"), "text")

    assert excinfo.value.identity == str(tmp_path / "missing" / "note.md")


def test_workspace_lists_notes_and_directories(tmp_path: Path) -> None:
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "inner.md").write_text("", encoding="utf-8")
    (tmp_path / "a.md").write_text("", encoding="utf-8")
    (tmp_path / "image.png").write_bytes(b"")
    (tmp_path / ".hidden.md").write_text("", encoding="utf-8")
    workspace = FileWorkspace(tmp_path)

    top = {(entry.name, entry.is_dir) for entry in workspace.list_entries("")}
    nested = [entry.path for entry in workspace.list_entries("sub")]

    assert top == {("sub", True), ("a.md", False)}
    assert nested == ["sub/inner.md"]


def test_workspace_file_operations(tmp_path: Path) -> None:
    (tmp_path / "sub").mkdir()
    workspace = FileWorkspace(tmp_path)

    workspace.create_file("a.md")
    with pytest.raises(DocumentIOError):
        workspace.create_file("a.md")

    workspace.copy("a.md", "sub/a.md")
    workspace.move("a.md", "b.md")
    assert workspace.exists("sub/a.md") and workspace.exists("b.md")
    assert not workspace.exists("a.md")

    workspace.delete_file("b.md")
    assert not workspace.exists("b.md")
    with pytest.raises(InvalidPathError):
        workspace.delete_file("sub")


def test_workspace_requires_existing_directory(tmp_path: Path) -> None:
    with pytest.raises(InvalidPathError):
        FileWorkspace(tmp_path / "nope")


class RecordingRunner:
    def __init__(self, returncode: int = 0, stderr: str = "") -> None:
        self.returncode = returncode
        self.stderr = stderr
        self.calls: list[tuple[list[str], dict]] = []

    def __call__(self, argv, **kwargs) -> subprocess.CompletedProcess:
        self.calls.append((list(argv), kwargs))
        return subprocess.CompletedProcess(argv, self.returncode, stdout="", stderr=self.stderr)


def test_scanner_index_and_remove_arguments() -> None:
    runner = RecordingRunner()
    indexer = ScannerIndexer("/notes", command="markdown-scanner", runner=runner)

    indexer.index("/notes/a.md")
    indexer.remove("/notes/b.md")

    assert [argv for argv, _ in runner.calls] == [
        ["markdown-scanner", "/notes/a.md", "/notes"],
        ["markdown-scanner", "--delete", "/notes/b.md", "/notes"],
    ]
    assert runner.calls[0][1]["capture_output"] is True


def test_scanner_failure_carries_stderr() -> None:
    indexer = ScannerIndexer("/notes", runner=RecordingRunner(returncode=2, stderr="bad yaml\n"))

    with pytest.raises(ScannerError) as excinfo:
        indexer.index("/notes/a.md")

    assert excinfo.value.returncode == 2
    assert excinfo.value.stderr == "bad yaml\n"
    assert str(excinfo.value) == "Markdown scanner error: bad yaml"


def test_scanner_missing_binary() -> None:
    def runner(argv, **kwargs):
        raise FileNotFoundError(argv[0])

    indexer = ScannerIndexer("/notes", command="not-installed", runner=runner)

    with pytest.raises(ScannerError):
        indexer.index("/notes/a.md")
