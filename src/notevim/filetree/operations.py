"""File tree mutations that keep the index in step with the disk."""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import Callable, Iterable, List, Optional

from notevim.runtime import telemetry
from notevim.services.protocols import Indexer, Workspace

from .model import FileTree

RelocateHook = Callable[[str, Optional[str]], None]


def _join(directory: str, name: str) -> str:
    return name if not directory else f"{directory}/{name}"


def _ignore(old: str, new: Optional[str]) -> None:
    del old, new


class TreeOperations:
    """Create, rename, delete, move and copy notes from the file tree.

    Each disk change is followed by the matching indexer call; a failing
    indexer raises ``ScannerError`` and the remaining paths are left alone.
    ``on_relocate`` receives the absolute old path and the new one (``None``
    after a delete) for every note that moved away from its path.
    """

    def __init__(
        self,
        tree: FileTree,
        workspace: Workspace,
        indexer: Indexer,
        *,
        on_relocate: RelocateHook = _ignore,
    ) -> None:
        self.tree = tree
        self.workspace = workspace
        self.indexer = indexer
        self.on_relocate = on_relocate
        self.logger = telemetry.get_logger("notevim.filetree")

    def _abs(self, path: str) -> str:
        return str(self.workspace.absolute(path))

    def delete_files(self, paths: Iterable[str]) -> List[str]:
        deleted: List[str] = []
        try:
            for path in paths:
                self.workspace.delete_file(path)
                self.on_relocate(self._abs(path), None)
                self.indexer.remove(self._abs(path))
                deleted.append(path)
        finally:
            self.tree.rebuild()
        telemetry.record_event("filetree.delete", data={"paths": deleted})
        return deleted

    def rename_selected(self, new_name: str) -> str:
        item = self.tree.selected_item
        if item is None:
            return "No file selected"
        if item.is_dir:
            return "Cannot rename directories"
        parent = PurePosixPath(item.path).parent.as_posix()
        target = _join("" if parent == "." else parent, new_name)
        self.workspace.move(item.path, target)
        self.on_relocate(self._abs(item.path), self._abs(target))
        try:
            self.indexer.remove(self._abs(item.path))
            self.indexer.index(self._abs(target))
        finally:
            self.tree.rebuild()
        telemetry.record_event("filetree.rename", data={"from": item.path, "to": target})
        return f"Renamed to {new_name}"
    def create_file(self, name: str) -> str:
        target = _join(self.tree.target_dir(), f"{name}.md")
        self.workspace.create_file(target)
        try:
            self.indexer.index(self._abs(target))
        finally:
            self.tree.rebuild()
        telemetry.record_event("filetree.create", data={"path": target})
        return "Created new file"

    def paste(self) -> str:
        """Move (cut) or copy clipboard paths into the target directory."""

        clipboard = self.tree.clipboard
        if clipboard.is_empty() or clipboard.mode is None:
            return "No paths in buffer"
        directory = self.tree.target_dir()
        try:
            for source in clipboard.paths:
                target = _join(directory, PurePosixPath(source).name)
                if clipboard.mode == "cut":
                    self.workspace.move(source, target)
                    self.on_relocate(self._abs(source), self._abs(target))
                    self.indexer.remove(self._abs(source))
                else:
                    self.workspace.copy(source, target)
                self.indexer.index(self._abs(target))
        finally:
            self.tree.rebuild()
        if clipboard.mode == "cut":
            clipboard.clear()
            return "Pasted (moved) from buffer"
        return "Pasted (cloned) from buffer"


__all__ = ["RelocateHook", "TreeOperations"]
