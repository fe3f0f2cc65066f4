"""Actions bound in the file tree and its range-selection mode."""

from __future__ import annotations

from typing import List

from notevim.filetree import SortKey
from notevim.keymaps import ResolutionMatch
from notevim.modes.base_mode import ModeContext, ModeResult, require_session, require_state
from notevim.modes.states import CommandState, FileTreeState, FileTreeVisualState


def _tree(context: ModeContext):
    return require_session(context).file_tree


def leave_tree(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, switch_to="normal", message="Normal")


def move_selection(context: ModeContext, match: ResolutionMatch, *, delta: int) -> ModeResult:
    del match
    _tree(context).move_selection(delta)
    return ModeResult(consumed=True, status="tree_select")


def collapse_or_parent(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """Collapse the selected directory, or jump to the enclosing one."""

    del match
    tree = _tree(context)
    item = tree.selected_item
    if item is None:
        return ModeResult(consumed=True, status="noop")
    if item.is_dir:
        tree.collapse(tree.selected)
    else:
        tree.select_parent()
    return ModeResult(consumed=True, status="tree_select")


def expand_directory(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    tree = _tree(context)
    item = tree.selected_item
    if item is not None and item.is_dir:
        tree.expand(tree.selected)
    return ModeResult(consumed=True, status="tree_select")


def activate_entry(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """Toggle a directory or open a file in the editor pane."""

    del match
    session = require_session(context)
    tree = session.file_tree
    item = tree.selected_item
    if item is None:
        return ModeResult(consumed=True, status="noop")
    if item.is_dir:
        tree.toggle(tree.selected)
        return ModeResult(consumed=True, status="tree_select")
    session.open_document(str(tree.absolute(item.path)))
    return ModeResult(
        consumed=True, switch_to="normal", status="navigate", message=f"Opened {item.name}"
    )


def start_range_selection(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    tree = _tree(context)
    if tree.selected is None:
        return ModeResult(consumed=True, status="noop")
    return ModeResult(
        consumed=True,
        switch_to="file_tree_visual",
        message="Visual",
        payload=FileTreeVisualState(anchor=tree.selected),
    )


def delete_entry(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    session = require_session(context)
    item = session.file_tree.selected_item
    if item is None:
        return ModeResult(consumed=True, status="noop")
    if item.is_dir:
        return ModeResult(consumed=True, status="noop", message="Cannot delete directories")
    session.tree_ops.delete_files([item.path])
    return ModeResult(consumed=True, status="tree_edit", message=f"Deleted {item.name}")


def _prompt(return_to: str, text: str, message: str) -> ModeResult:
    return ModeResult(
        consumed=True,
        switch_to="command",
        message=message,
        payload=CommandState(text=text, return_to=return_to),
    )


def prompt_rename(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del context, match
    return _prompt("file_tree", "rename ", "Rename to:")


def prompt_new_file(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del context, match
    return _prompt("file_tree", "new ", "New file name:")


def _selected_files(context: ModeContext) -> List[str]:
    tree = _tree(context)
    if tree.selected is None:
        return []
    return tree.file_paths(tree.selected, tree.selected)


def copy_entry(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    paths = _selected_files(context)
    _tree(context).clipboard.copy(paths)
    return ModeResult(consumed=True, status="tree_clip", message=f"Copied {len(paths)} paths to buffer")


def cut_entry(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    paths = _selected_files(context)
    _tree(context).clipboard.cut(paths)
    return ModeResult(consumed=True, status="tree_clip", message=f"Cut {len(paths)} paths to buffer")


def paste_entries(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    message = require_session(context).tree_ops.paste()
    return ModeResult(consumed=True, status="tree_edit", message=message)


def resize_tree(context: ModeContext, match: ResolutionMatch, *, direction: int) -> ModeResult:
    del match
    session = require_session(context)
    session.file_tree.resize(direction * session.settings.tree_width_step)
    return ModeResult(consumed=True, status="tree_layout")


def toggle_full_screen(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    full = _tree(context).toggle_full_screen()
    message = "Full-screen FileTree" if full else "Split FileTree"
    return ModeResult(consumed=True, status="tree_layout", message=message)


def toggle_sort(context: ModeContext, match: ResolutionMatch, *, key: SortKey) -> ModeResult:
    del match
    ascending = _tree(context).toggle_sort(key)
    label = "modification time" if key == "modified" else "name"
    direction = "ascending" if ascending else "descending"
    return ModeResult(
        consumed=True, status="tree_sort", message=f"Sorted by {label} ({direction})"
    )


# -- range selection --------------------------------------------------------


def _range_files(context: ModeContext) -> List[str]:
    state = require_state(context, FileTreeVisualState)
    tree = _tree(context)
    current = tree.selected if tree.selected is not None else state.anchor
    return tree.file_paths(state.anchor, current)


def _back_to_tree(message: str, status: str = "tree_edit") -> ModeResult:
    return ModeResult(
        consumed=True,
        switch_to="file_tree",
        status=status,
        message=message,
        payload=FileTreeState(),
    )


def leave_range(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del context, match
    return _back_to_tree("File Tree", status="ok")


def delete_range(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    state = require_state(context, FileTreeVisualState)
    session = require_session(context)
    tree = session.file_tree
    paths = _range_files(context)
    first = min(state.anchor, tree.selected if tree.selected is not None else state.anchor)
    session.tree_ops.delete_files(paths)
    tree.select(first)
    return _back_to_tree(f"Deleted {len(paths)} files")


def copy_range(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    paths = _range_files(context)
    _tree(context).clipboard.copy(paths)
    return _back_to_tree(f"Copied {len(paths)} paths to buffer", status="tree_clip")


def cut_range(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    paths = _range_files(context)
    _tree(context).clipboard.cut(paths)
    return _back_to_tree(f"Cut {len(paths)} paths to buffer", status="tree_clip")


def prompt_rename_range(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    state = require_state(context, FileTreeVisualState)
    if _tree(context).selected != state.anchor:
        return ModeResult(consumed=True, status="noop", message="Rename only for single file")
    return _prompt("file_tree_visual", "rename ", "Rename to:")


__all__ = [
    "activate_entry",
    "collapse_or_parent",
    "copy_entry",
    "copy_range",
    "cut_entry",
    "cut_range",
    "delete_entry",
    "delete_range",
    "expand_directory",
    "leave_range",
    "leave_tree",
    "move_selection",
    "paste_entries",
    "prompt_new_file",
    "prompt_rename",
    "prompt_rename_range",
    "resize_tree",
    "start_range_selection",
    "toggle_full_screen",
    "toggle_sort",
]
