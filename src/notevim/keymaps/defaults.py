"""Built-in keymaps that seed each mode with the editor's default keys."""

from __future__ import annotations

from functools import partial
from typing import Iterable, Mapping, Sequence

from notevim.actions import command as command_actions
from notevim.actions import completion as completion_actions
from notevim.actions import core as core_actions
from notevim.actions import editing as editing_actions
from notevim.actions import navigation as navigation_actions
from notevim.actions import search as search_actions
from notevim.actions import tree as tree_actions
from notevim.actions import visual as visual_actions

from .models import ActionRef, Binding, KeySequence
from .registry import KeymapRegistry

_MOTION_LABELS = {
    "left": "left",
    "right": "right",
    "up": "up",
    "down": "down",
    "word_back": "to the previous word",
    "word_forward": "to the next word",
    "line_head": "to line start",
    "line_end": "to line end",
    "top": "to document start",
    "bottom": "to document end",
}


def _motion_actions() -> tuple[ActionRef, ...]:
    actions = []
    for motion, label in _MOTION_LABELS.items():
        actions.append(
            ActionRef(
                id=f"edit.move_{motion}",
                handler=partial(editing_actions.move_cursor, motion=motion),
                description=f"Move cursor {label}",
            )
        )
        actions.append(
            ActionRef(
                id=f"visual.extend_{motion}",
                handler=partial(visual_actions.extend_selection, motion=motion),
                description=f"Extend selection {label}",
            )
        )
    return tuple(actions)


DEFAULT_ACTIONS: tuple[ActionRef, ...] = _motion_actions() + (
    ActionRef(
        id="core.enter_insert",
        handler=core_actions.enter_insert_mode,
        description="Enter insert mode",
    ),
    ActionRef(
        id="core.append",
        handler=core_actions.append_after_cursor,
        description="Insert after the cursor",
    ),
    ActionRef(
        id="core.open_line_below",
        handler=core_actions.open_line_below,
        description="Open a new line below and insert",
    ),
    ActionRef(
        id="core.exit_to_normal",
        handler=core_actions.exit_to_normal_mode,
        description="Return to normal mode",
    ),
    ActionRef(
        id="core.enter_visual",
        handler=core_actions.enter_visual_mode,
        description="Enter visual mode",
    ),
    ActionRef(
        id="core.enter_visual_block",
        handler=core_actions.enter_visual_block_mode,
        description="Enter visual block mode",
    ),
    ActionRef(
        id="core.enter_command",
        handler=core_actions.enter_command_mode,
        description="Enter command-line mode",
    ),
    ActionRef(
        id="edit.jump_top",
        handler=editing_actions.jump_to_top,
        description="Jump to the first line",
    ),
    ActionRef(
        id="edit.delete_char",
        handler=editing_actions.delete_char_under_cursor,
        description="Delete the character under the cursor",
    ),
    ActionRef(
        id="edit.yank_line",
        handler=editing_actions.yank_line,
        description="Yank the current line",
    ),
    ActionRef(
        id="edit.delete_line",
        handler=editing_actions.delete_line,
        description="Delete the current line",
    ),
    ActionRef(
        id="edit.paste_below",
        handler=editing_actions.paste_below,
        description="Paste the register below the current line",
    ),
    ActionRef(id="edit.undo", handler=editing_actions.undo, description="Undo"),
    ActionRef(id="edit.redo", handler=editing_actions.redo, description="Redo"),
    ActionRef(
        id="edit.newline",
        handler=editing_actions.insert_newline,
        description="Split the line at the cursor",
    ),
    ActionRef(
        id="edit.tab",
        handler=editing_actions.insert_tab,
        description="Insert spaces up to the tab width",
    ),
    ActionRef(
        id="edit.backspace",
        handler=editing_actions.delete_before_cursor,
        description="Delete before the cursor",
    ),
    ActionRef(
        id="nav.history_back",
        handler=navigation_actions.history_back,
        description="Open the previous document in history",
    ),
    ActionRef(
        id="nav.history_forward",
        handler=navigation_actions.history_forward,
        description="Open the next document in history",
    ),
    ActionRef(
        id="nav.follow_link",
        handler=navigation_actions.follow_link,
        description="Follow the link on the cursor line",
    ),
    ActionRef(
        id="nav.search_backlinks",
        handler=partial(navigation_actions.start_search, kind="backlinks"),
        description="Search documents linking here",
    ),
    ActionRef(
        id="nav.search_tags",
        handler=partial(navigation_actions.start_search, kind="tags"),
        description="Search tags",
    ),
    ActionRef(
        id="nav.search_files",
        handler=partial(navigation_actions.start_search, kind="files"),
        description="Search files",
    ),
    ActionRef(
        id="nav.daily_today",
        handler=partial(navigation_actions.open_daily_note, offset_days=0),
        description="Open today's note",
    ),
    ActionRef(
        id="nav.daily_yesterday",
        handler=partial(navigation_actions.open_daily_note, offset_days=-1),
        description="Open yesterday's note",
    ),
    ActionRef(
        id="nav.daily_tomorrow",
        handler=partial(navigation_actions.open_daily_note, offset_days=1),
        description="Open tomorrow's note",
    ),
    ActionRef(
        id="nav.file_tree",
        handler=navigation_actions.enter_file_tree,
        description="Open the file tree",
    ),
    ActionRef(
        id="visual.yank_selection",
        handler=visual_actions.yank_selection,
        description="Yank current visual selection",
    ),
    ActionRef(
        id="visual.delete_selection",
        handler=visual_actions.delete_selection,
        description="Delete current selection",
    ),
    ActionRef(
        id="visual.block_insert_before",
        handler=visual_actions.block_insert_before,
        description="Insert before the block on every row",
    ),
    ActionRef(
        id="visual.block_insert_after",
        handler=visual_actions.block_insert_after,
        description="Insert after the block on every row",
    ),
    ActionRef(
        id="block.erase",
        handler=visual_actions.block_insert_erase,
        description="Erase the last inserted block column",
    ),
    ActionRef(
        id="block.leave",
        handler=visual_actions.leave_block_insert,
        description="Finish block insert",
    ),
    ActionRef(
        id="command.submit_line",
        handler=command_actions.submit_command_line,
        description="Evaluate the active command line",
    ),
    ActionRef(
        id="command.cancel",
        handler=command_actions.cancel_command,
        description="Abandon the command line",
    ),
    ActionRef(
        id="command.erase",
        handler=command_actions.erase_command_char,
        description="Erase the last command character",
    ),
    ActionRef(
        id="complete.cancel",
        handler=completion_actions.cancel_completion,
        description="Close completion",
    ),
    ActionRef(
        id="complete.accept",
        handler=completion_actions.accept_completion,
        description="Insert the highlighted suggestion",
    ),
    ActionRef(
        id="complete.up",
        handler=completion_actions.completion_up,
        description="Highlight the previous suggestion",
    ),
    ActionRef(
        id="complete.down",
        handler=completion_actions.completion_down,
        description="Highlight the next suggestion",
    ),
    ActionRef(
        id="complete.backspace",
        handler=completion_actions.completion_backspace,
        description="Erase and re-query suggestions",
    ),
    ActionRef(
        id="search.cancel",
        handler=search_actions.cancel_search,
        description="Close search",
    ),
    ActionRef(
        id="search.confirm",
        handler=search_actions.confirm_search,
        description="Open the selected result",
    ),
    ActionRef(
        id="search.up",
        handler=search_actions.search_up,
        description="Select the previous result",
    ),
    ActionRef(
        id="search.down",
        handler=search_actions.search_down,
        description="Select the next result",
    ),
    ActionRef(
        id="search.backspace",
        handler=search_actions.search_backspace,
        description="Erase the last query character",
    ),
    ActionRef(
        id="tag_files.up",
        handler=search_actions.tag_files_up,
        description="Select the previous file",
    ),
    ActionRef(
        id="tag_files.down",
        handler=search_actions.tag_files_down,
        description="Select the next file",
    ),
    ActionRef(
        id="tag_files.open",
        handler=search_actions.open_tag_file,
        description="Open the selected file",
    ),
    ActionRef(
        id="tag_files.cancel",
        handler=search_actions.cancel_tag_files,
        description="Close the tag file list",
    ),
    ActionRef(
        id="tree.leave",
        handler=tree_actions.leave_tree,
        description="Return to the editor",
    ),
    ActionRef(
        id="tree.up",
        handler=partial(tree_actions.move_selection, delta=-1),
        description="Select the previous entry",
    ),
    ActionRef(
        id="tree.down",
        handler=partial(tree_actions.move_selection, delta=1),
        description="Select the next entry",
    ),
    ActionRef(
        id="tree.collapse",
        handler=tree_actions.collapse_or_parent,
        description="Collapse directory or jump to parent",
    ),
    ActionRef(
        id="tree.expand",
        handler=tree_actions.expand_directory,
        description="Expand directory",
    ),
    ActionRef(
        id="tree.activate",
        handler=tree_actions.activate_entry,
        description="Toggle directory or open file",
    ),
    ActionRef(
        id="tree.visual",
        handler=tree_actions.start_range_selection,
        description="Start selecting a range of entries",
    ),
    ActionRef(
        id="tree.delete",
        handler=tree_actions.delete_entry,
        description="Delete the selected file",
    ),
    ActionRef(
        id="tree.rename",
        handler=tree_actions.prompt_rename,
        description="Rename the selected file",
    ),
    ActionRef(
        id="tree.new",
        handler=tree_actions.prompt_new_file,
        description="Create a new note",
    ),
    ActionRef(
        id="tree.copy",
        handler=tree_actions.copy_entry,
        description="Copy the selected file path",
    ),
    ActionRef(
        id="tree.cut",
        handler=tree_actions.cut_entry,
        description="Cut the selected file path",
    ),
    ActionRef(
        id="tree.paste",
        handler=tree_actions.paste_entries,
        description="Paste copied or cut files",
    ),
    ActionRef(
        id="tree.narrow",
        handler=partial(tree_actions.resize_tree, direction=-1),
        description="Narrow the tree pane",
    ),
    ActionRef(
        id="tree.widen",
        handler=partial(tree_actions.resize_tree, direction=1),
        description="Widen the tree pane",
    ),
    ActionRef(
        id="tree.full_screen",
        handler=tree_actions.toggle_full_screen,
        description="Toggle full-screen tree",
    ),
    ActionRef(
        id="tree.sort_modified",
        handler=partial(tree_actions.toggle_sort, key="modified"),
        description="Sort by modification time",
    ),
    ActionRef(
        id="tree.sort_name",
        handler=partial(tree_actions.toggle_sort, key="name"),
        description="Sort by name",
    ),
    ActionRef(
        id="tree_visual.leave",
        handler=tree_actions.leave_range,
        description="Return to the file tree",
    ),
    ActionRef(
        id="tree_visual.delete",
        handler=tree_actions.delete_range,
        description="Delete files in range",
    ),
    ActionRef(
        id="tree_visual.copy",
        handler=tree_actions.copy_range,
        description="Copy files in range",
    ),
    ActionRef(
        id="tree_visual.cut",
        handler=tree_actions.cut_range,
        description="Cut files in range",
    ),
    ActionRef(
        id="tree_visual.rename",
        handler=tree_actions.prompt_rename_range,
        description="Rename a single selected file",
    ),
)


def _typed(mode: str, name: str, keys: str, action_id: str) -> Binding:
    return Binding(
        id=f"{mode}.{name}",
        mode=mode,
        sequence=KeySequence.typed(keys),
        action_id=action_id,
    )


def _named(mode: str, name: str, key: str, action_id: str, *modifiers: str) -> Binding:
    sequence = KeySequence.chord(key, *modifiers) if modifiers else KeySequence.from_strings(key)
    return Binding(id=f"{mode}.{name}", mode=mode, sequence=sequence, action_id=action_id)


def _cursor_keys(mode: str, prefix: str) -> tuple[Binding, ...]:
    """Arrow, Home/End and Ctrl chords shared by every cursor-moving mode."""

    return (
        _named(mode, "left_arrow", "LEFT", f"{prefix}_left"),
        _named(mode, "right_arrow", "RIGHT", f"{prefix}_right"),
        _named(mode, "up_arrow", "UP", f"{prefix}_up"),
        _named(mode, "down_arrow", "DOWN", f"{prefix}_down"),
        _named(mode, "home", "HOME", f"{prefix}_line_head"),
        _named(mode, "end", "END", f"{prefix}_line_end"),
        _named(mode, "word_back", "LEFT", f"{prefix}_word_back", "ctrl"),
        _named(mode, "word_forward", "RIGHT", f"{prefix}_word_forward", "ctrl"),
        _named(mode, "doc_top", "HOME", f"{prefix}_top", "ctrl"),
        _named(mode, "doc_bottom", "END", f"{prefix}_bottom", "ctrl"),
    )


def _letter_motions(mode: str, prefix: str) -> tuple[Binding, ...]:
    return (
        _typed(mode, "h", "h", f"{prefix}_left"),
        _typed(mode, "j", "j", f"{prefix}_down"),
        _typed(mode, "k", "k", f"{prefix}_up"),
        _typed(mode, "l", "l", f"{prefix}_right"),
        _typed(mode, "G", "G", f"{prefix}_bottom"),
    )


def _visual_bindings(mode: str) -> tuple[Binding, ...]:
    return (
        _named(mode, "exit_escape", "ESC", "core.exit_to_normal"),
        _typed(mode, "yank", "y", "visual.yank_selection"),
        _typed(mode, "delete", "d", "visual.delete_selection"),
        _typed(mode, "cut", "x", "visual.delete_selection"),
        *_letter_motions(mode, "visual.extend"),
        *_cursor_keys(mode, "visual.extend"),
    )


def _list_bindings(mode: str, prefix: str, *, confirm: str, cancel: str) -> tuple[Binding, ...]:
    return (
        _named(mode, "cancel", "ESC", cancel),
        _named(mode, "confirm", "ENTER", confirm),
        _named(mode, "up", "UP", f"{prefix}.up"),
        _named(mode, "down", "DOWN", f"{prefix}.down"),
    )


DEFAULT_BINDINGS: tuple[Binding, ...] = (
    # normal: single keys
    _typed("normal", "enter_insert", "i", "core.enter_insert"),
    _typed("normal", "append", "a", "core.append"),
    _typed("normal", "open_line_below", "o", "core.open_line_below"),
    _typed("normal", "enter_visual", "v", "core.enter_visual"),
    _named("normal", "enter_visual_block", "v", "core.enter_visual_block", "ctrl"),
    _typed("normal", "enter_command", ":", "core.enter_command"),
    _typed("normal", "delete_char", "x", "edit.delete_char"),
    _typed("normal", "paste_below", "p", "edit.paste_below"),
    _typed("normal", "undo", "u", "edit.undo"),
    _named("normal", "redo", "r", "edit.redo", "ctrl"),
    _named("normal", "history_back", "o", "nav.history_back", "ctrl"),
    _named("normal", "history_forward", "i", "nav.history_forward", "ctrl"),
    # terminals report Ctrl-I as Tab
    _named("normal", "history_forward_tab", "TAB", "nav.history_forward"),
    _named("normal", "follow_link", "ENTER", "nav.follow_link"),
    *_letter_motions("normal", "edit.move"),
    *_cursor_keys("normal", "edit.move"),
    # normal: sequences
    _typed("normal", "gg", "gg", "edit.jump_top"),
    _typed("normal", "yy", "yy", "edit.yank_line"),
    _typed("normal", "dd", "dd", "edit.delete_line"),
    _typed("normal", "search_backlinks", "\\ob", "nav.search_backlinks"),
    _typed("normal", "search_tags", "\\ot", "nav.search_tags"),
    _typed("normal", "search_files", "\\f", "nav.search_files"),
    _typed("normal", "daily_today", "\\oot", "nav.daily_today"),
    _typed("normal", "daily_yesterday", "\\ooy", "nav.daily_yesterday"),
    _typed("normal", "daily_tomorrow", "\\ooT", "nav.daily_tomorrow"),
    _typed("normal", "file_tree", "\\t", "nav.file_tree"),
    # insert
    _named("insert", "exit_escape", "ESC", "core.exit_to_normal"),
    _named("insert", "newline", "ENTER", "edit.newline"),
    _named("insert", "backspace", "BACKSPACE", "edit.backspace"),
    _named("insert", "delete", "DELETE", "edit.delete_char"),
    _named("insert", "tab", "TAB", "edit.tab"),
    *_cursor_keys("insert", "edit.move"),
    # complete
    *_list_bindings("complete", "complete", confirm="complete.accept", cancel="complete.cancel"),
    _named("complete", "backspace", "BACKSPACE", "complete.backspace"),
    # search and tag file list
    *_list_bindings("search", "search", confirm="search.confirm", cancel="search.cancel"),
    _named("search", "backspace", "BACKSPACE", "search.backspace"),
    *_list_bindings(
        "tag_files", "tag_files", confirm="tag_files.open", cancel="tag_files.cancel"
    ),
    # visual
    *_visual_bindings("visual"),
    *_visual_bindings("visual_block"),
    _typed("visual_block", "insert_before", "I", "visual.block_insert_before"),
    _typed("visual_block", "insert_after", "A", "visual.block_insert_after"),
    # block insert
    _named("block_insert", "exit_escape", "ESC", "block.leave"),
    _named("block_insert", "backspace", "BACKSPACE", "block.erase"),
    # command line
    _named("command", "cancel", "ESC", "command.cancel"),
    _named("command", "submit", "ENTER", "command.submit_line"),
    _named("command", "backspace", "BACKSPACE", "command.erase"),
    # file tree
    _named("file_tree", "leave", "ESC", "tree.leave"),
    _named("file_tree", "up", "UP", "tree.up"),
    _named("file_tree", "down", "DOWN", "tree.down"),
    _named("file_tree", "collapse", "LEFT", "tree.collapse"),
    _named("file_tree", "expand", "RIGHT", "tree.expand"),
    _named("file_tree", "activate", "ENTER", "tree.activate"),
    _typed("file_tree", "visual", "v", "tree.visual"),
    _typed("file_tree", "delete", "d", "tree.delete"),
    _typed("file_tree", "rename", "r", "tree.rename"),
    _typed("file_tree", "new", "n", "tree.new"),
    _typed("file_tree", "copy", "y", "tree.copy"),
    _typed("file_tree", "cut", "x", "tree.cut"),
    _typed("file_tree", "paste", "p", "tree.paste"),
    _typed("file_tree", "narrow", "<", "tree.narrow"),
    _typed("file_tree", "widen", ">", "tree.widen"),
    _typed("file_tree", "full_screen", "f", "tree.full_screen"),
    _typed("file_tree", "sort_modified", "oc", "tree.sort_modified"),
    _typed("file_tree", "sort_name", "on", "tree.sort_name"),
    # file tree range selection
    _named("file_tree_visual", "leave", "ESC", "tree_visual.leave"),
    _named("file_tree_visual", "up", "UP", "tree.up"),
    _named("file_tree_visual", "down", "DOWN", "tree.down"),
    _typed("file_tree_visual", "delete", "d", "tree_visual.delete"),
    _typed("file_tree_visual", "copy", "y", "tree_visual.copy"),
    _typed("file_tree_visual", "cut", "x", "tree_visual.cut"),
    _typed("file_tree_visual", "rename", "r", "tree_visual.rename"),
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    include_actions: Sequence[str] | None = None,
    exclude_actions: Sequence[str] | None = None,
    include_bindings: Sequence[str] | None = None,
    exclude_bindings: Sequence[str] | None = None,
    extra_bindings: Iterable[Binding] | None = None,
    per_mode_overrides: Mapping[str, Iterable[Binding]] | None = None,
    replace: bool = False,
) -> None:
    """Register built-in actions and bindings for every mode."""

    allowed_actions = _build_filters(include_actions, exclude_actions)
    allowed_bindings = _build_filters(include_bindings, exclude_bindings)

    for action in DEFAULT_ACTIONS:
        if not _selected(action.id, allowed_actions):
            continue
        registry.register_action(action, replace=replace)

    for binding in DEFAULT_BINDINGS:
        if not _selected(binding.id, allowed_bindings):
            continue
        registry.register_binding(binding, replace=replace)

    if extra_bindings:
        for binding in extra_bindings:
            registry.register_binding(binding, replace=replace)

    if per_mode_overrides:
        for mode, bindings in per_mode_overrides.items():
            for binding in bindings:
                if binding.mode != mode:
                    raise ValueError(
                        f"Override binding '{binding.id}' must target mode '{mode}'"
                    )
                registry.register_binding(binding, replace=True)


def _build_filters(
    include: Sequence[str] | None, exclude: Sequence[str] | None
) -> tuple[set[str] | None, set[str]]:
    include_set = set(include) if include else None
    exclude_set = set(exclude or ())
    return include_set, exclude_set


def _selected(item_id: str, filters: tuple[set[str] | None, set[str]]) -> bool:
    include, exclude = filters
    if include is not None and item_id not in include:
        return False
    if item_id in exclude:
        return False
    return True


__all__ = ["DEFAULT_ACTIONS", "DEFAULT_BINDINGS", "load_default_keymaps"]
