"""Filesystem-backed document store and workspace."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import List

from notevim.errors import DocumentIOError, InvalidPathError
from notevim.runtime import telemetry

from .protocols import WorkspaceEntry

NOTE_SUFFIX = ".md"


class FileDocumentStore:
    """Documents are UTF-8 files; the identity is the path.

    A missing file loads as an empty document so new notes can be opened
    before their first save.
    """

    def load(self, identity: str) -> str:
        path = Path(identity)
        if not path.exists():
            return ""
        try:
            return path.read_bytes().decode("utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise DocumentIOError(f"Cannot read {identity}: {exc}", identity=identity) from exc

    def save(self, identity: str, content: str) -> None:
        with telemetry.span(
            "store::save", component="store", metadata={"identity": identity}
        ):
            try:
                Path(identity).write_text(content, encoding="utf-8", newline="")
            except OSError as exc:
                raise DocumentIOError(
                    f"Cannot write {identity}: {exc}", identity=identity
                ) from exc

    def exists(self, identity: str) -> bool:
        return Path(identity).is_file()

    def create(self, identity: str) -> None:
        path = Path(identity)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text("", encoding="utf-8")
        except OSError as exc:
            raise DocumentIOError(f"Cannot create {identity}: {exc}", identity=identity) from exc
        telemetry.record_event("store.create", data={"identity": identity})


class FileWorkspace:
    """Notes directory as seen by the file tree.

    Only directories and Markdown files are listed; names starting with a
    dot are skipped.
    """

    def __init__(self, base_dir: Path | str) -> None:
        base = Path(base_dir)
        if not base.is_dir():
            raise InvalidPathError(f"Base directory does not exist: {base}")
        self.base_dir = base

    def absolute(self, path: str) -> Path:
        return self.base_dir / path if path else self.base_dir

    def exists(self, path: str) -> bool:
        return self.absolute(path).exists()

    def list_entries(self, path: str) -> List[WorkspaceEntry]:
        directory = self.absolute(path)
        try:
            children = list(directory.iterdir())
        except OSError as exc:
            raise InvalidPathError(f"Cannot list {directory}: {exc}") from exc
        entries: List[WorkspaceEntry] = []
        for child in children:
            if child.name.startswith("."):
                continue
            is_dir = child.is_dir()
            if not is_dir and child.suffix != NOTE_SUFFIX:
                continue
            try:
                modified = child.stat().st_mtime
            except OSError:
                modified = 0.0
            relative = child.relative_to(self.base_dir).as_posix()
            entries.append(
                WorkspaceEntry(name=child.name, path=relative, is_dir=is_dir, modified=modified)
            )
        return entries

    def create_file(self, path: str) -> None:
        target = self.absolute(path)
        if target.exists():
            raise DocumentIOError(f"{path} already exists", identity=str(target))
        self._guard("create", path, lambda: target.write_text("", encoding="utf-8"))

    def delete_file(self, path: str) -> None:
        target = self.absolute(path)
        if target.is_dir():
            raise InvalidPathError("Cannot delete directories")
        self._guard("delete", path, target.unlink)

    def move(self, source: str, target: str) -> None:
        self._guard(
            "move", source, lambda: self.absolute(source).rename(self.absolute(target))
        )

    def copy(self, source: str, target: str) -> None:
        self._guard(
            "copy", source, lambda: shutil.copy2(self.absolute(source), self.absolute(target))
        )

    def _guard(self, verb: str, path: str, operation) -> None:
        with telemetry.span(
            f"workspace::{verb}", component="workspace", metadata={"path": path}
        ):
            try:
                operation()
            except OSError as exc:
                raise DocumentIOError(
                    f"Cannot {verb} {path}: {exc}", identity=str(self.absolute(path))
                ) from exc


__all__ = ["FileDocumentStore", "FileWorkspace", "NOTE_SUFFIX"]
