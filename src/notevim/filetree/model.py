"""In-memory file tree with lazily loaded directories."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Dict, List, Literal, Optional, Set

from notevim.runtime import telemetry
from notevim.services.protocols import Workspace, WorkspaceEntry

SortKey = Literal["name", "modified"]
ClipboardMode = Literal["copy", "cut"]


@dataclass(slots=True)
class TreeNode:
    name: str
    path: str
    is_dir: bool
    modified: float = 0.0
    expanded: bool = False
    children: Optional[List["TreeNode"]] = None

    @classmethod
    def from_entry(cls, entry: WorkspaceEntry) -> "TreeNode":
        return cls(name=entry.name, path=entry.path, is_dir=entry.is_dir, modified=entry.modified)


@dataclass(frozen=True, slots=True)
class TreeItem:
    """One visible row of the tree."""

    name: str
    path: str
    is_dir: bool
    depth: int
    expanded: bool = False

    @property
    def display(self) -> str:
        suffix = "/" if self.is_dir else ""
        return f"{'  ' * self.depth}{self.name}{suffix}"


@dataclass(slots=True)
class TreeClipboard:
    paths: List[str] = field(default_factory=list)
    mode: Optional[ClipboardMode] = None

    def copy(self, paths: List[str]) -> None:
        self.paths = list(paths)
        self.mode = "copy"

    def cut(self, paths: List[str]) -> None:
        self.paths = list(paths)
        self.mode = "cut"

    def clear(self) -> None:
        self.paths = []
        self.mode = None

    def is_empty(self) -> bool:
        return not self.paths


class FileTree:
    """Directories and notes under the workspace root.

    Directories load their children on first expansion. ``items`` is the
    flattened list of visible rows; ``selected`` indexes into it and is
    ``None`` only when the tree is empty.
    """

    def __init__(
        self,
        workspace: Workspace,
        *,
        width: int = 20,
        width_min: int = 10,
        width_max: int = 50,
    ) -> None:
        self.workspace = workspace
        self.roots: List[TreeNode] = []
        self.items: List[TreeItem] = []
        self.selected: Optional[int] = None
        self.loaded = False
        self.sort_key: SortKey = "name"
        self.ascending = True
        self.width = width
        self.width_min = width_min
        self.width_max = width_max
        self.full_screen = False
        self.clipboard = TreeClipboard()
        self._nodes: Dict[str, TreeNode] = {}

    # -- loading --------------------------------------------------------------

    def build(self) -> None:
        with telemetry.span("filetree::build", component="filetree"):
            self.roots = self._load("")
            self.loaded = True
            self._refresh()
        self.select(0 if self.selected is None else self.selected)

    def rebuild(self) -> None:
        """Reload from disk, keeping expanded directories and the selected path."""

        expanded = {path for path, node in self._nodes.items() if node.expanded}
        selected_path = self.selected_item.path if self.selected_item else None
        with telemetry.span("filetree::rebuild", component="filetree"):
            self.roots = self._load("")
            self.loaded = True
            self._restore_expansion(self.roots, expanded)
            self._refresh()
        if selected_path is not None and self._select_path(selected_path):
            return
        self.select(self.selected if self.selected is not None else 0)

    def _load(self, path: str) -> List[TreeNode]:
        nodes = [TreeNode.from_entry(entry) for entry in self.workspace.list_entries(path)]
        return self._sorted(nodes)

    def _restore_expansion(self, nodes: List[TreeNode], expanded: Set[str]) -> None:
        for node in nodes:
            if node.is_dir and node.path in expanded:
                node.children = self._load(node.path)
                node.expanded = True
                self._restore_expansion(node.children, expanded)

    def _sorted(self, nodes: List[TreeNode]) -> List[TreeNode]:
        if self.sort_key == "modified":
            key = lambda node: (node.modified, node.name)  # noqa: E731
        else:
            key = lambda node: node.name  # noqa: E731
        reverse = not self.ascending
        dirs = sorted((node for node in nodes if node.is_dir), key=key, reverse=reverse)
        files = sorted((node for node in nodes if not node.is_dir), key=key, reverse=reverse)
        return dirs + files

    def _refresh(self) -> None:
        items: List[TreeItem] = []
        index: Dict[str, TreeNode] = {}

        def walk(nodes: List[TreeNode], depth: int) -> None:
            for node in nodes:
                index[node.path] = node
                items.append(
                    TreeItem(node.name, node.path, node.is_dir, depth, node.expanded)
                )
                if node.is_dir and node.expanded and node.children:
                    walk(node.children, depth + 1)

        walk(self.roots, 0)
        self.items = items
        self._nodes = index
        if not items:
            self.selected = None
        elif self.selected is not None:
            self.selected = min(self.selected, len(items) - 1)

    # -- selection ------------------------------------------------------------

    @property
    def selected_item(self) -> Optional[TreeItem]:
        if self.selected is None or not self.items:
            return None
        return self.items[self.selected]

    def select(self, index: int) -> None:
        if not self.items:
            self.selected = None
            return
        self.selected = max(0, min(index, len(self.items) - 1))

    def _select_path(self, path: str) -> bool:
        for index, item in enumerate(self.items):
            if item.path == path:
                self.selected = index
                return True
        return False

    def move_selection(self, delta: int) -> None:
        if self.selected is None:
            self.select(0)
            return
        self.select(self.selected + delta)

    def select_parent(self) -> None:
        """Jump to the closest row above with a smaller depth."""

        item = self.selected_item
        if item is None or self.selected is None:
            return
        for index in range(self.selected - 1, -1, -1):
            if self.items[index].depth < item.depth:
                self.selected = index
                return

    # -- expansion ------------------------------------------------------------

    def _dir_node(self, index: Optional[int]) -> Optional[TreeNode]:
        if index is None or not 0 <= index < len(self.items):
            return None
        item = self.items[index]
        if not item.is_dir:
            return None
        return self._nodes.get(item.path)

    def expand(self, index: Optional[int]) -> None:
        node = self._dir_node(index)
        if node is None or node.expanded:
            return
        if node.children is None:
            node.children = self._load(node.path)
        node.expanded = True
        self._refresh()

    def collapse(self, index: Optional[int]) -> None:
        node = self._dir_node(index)
        if node is None or not node.expanded:
            return
        node.expanded = False
        self._refresh()

    def toggle(self, index: Optional[int]) -> None:
        node = self._dir_node(index)
        if node is None:
            return
        if node.expanded:
            self.collapse(index)
        else:
            self.expand(index)

    # -- ordering and layout --------------------------------------------------

    def toggle_sort(self, key: SortKey) -> bool:
        """Sort by ``key``; picking the active key again flips the direction.

        Returns whether the new order is ascending.
        """

        if self.sort_key == key:
            self.ascending = not self.ascending
        else:
            self.sort_key = key
            self.ascending = True
        selected_path = self.selected_item.path if self.selected_item else None
        self.roots = self._resort(self.roots)
        self._refresh()
        if selected_path is not None:
            self._select_path(selected_path)
        return self.ascending

    def _resort(self, nodes: List[TreeNode]) -> List[TreeNode]:
        for node in nodes:
            if node.children:
                node.children = self._resort(node.children)
        return self._sorted(nodes)

    def resize(self, step: int) -> int:
        if not self.full_screen:
            self.width = max(self.width_min, min(self.width + step, self.width_max))
        return self.width

    def toggle_full_screen(self) -> bool:
        self.full_screen = not self.full_screen
        return self.full_screen

    # -- paths ----------------------------------------------------------------

    def file_paths(self, start: int, end: int) -> List[str]:
        """Paths of the files (not directories) between two rows, inclusive."""

        if not self.items:
            return []
        low, high = sorted((start, end))
        high = min(high, len(self.items) - 1)
        return [item.path for item in self.items[max(low, 0) : high + 1] if not item.is_dir]

    def target_dir(self) -> str:
        """Directory for new or pasted files: the selected directory or the file's parent."""

        item = self.selected_item
        if item is None:
            return ""
        if item.is_dir:
            return item.path
        parent = PurePosixPath(item.path).parent.as_posix()
        return "" if parent == "." else parent

    def absolute(self, path: str) -> Path:
        return self.workspace.absolute(path)


__all__ = ["ClipboardMode", "FileTree", "SortKey", "TreeClipboard", "TreeItem", "TreeNode"]
