from __future__ import annotations

from notevim.filetree import FileTree, TreeOperations
from notevim.modes import CommandState, FileTreeVisualState

from fakes import FakeIndexer, FakeStore, FakeWorkspace, make_session, note, press, type_text


def make_workspace() -> FakeWorkspace:
    return FakeWorkspace(
        files={"a.md": 3.0, "b.md": 1.0, "notes/c.md": 2.0},
        dirs={"notes"},
    )


def make_tree(workspace: FakeWorkspace | None = None) -> FileTree:
    tree = FileTree(workspace or make_workspace())
    tree.build()
    return tree


def names(tree: FileTree) -> list[str]:
    return [item.display for item in tree.items]


def test_build_lists_directories_first() -> None:
    tree = make_tree()

    assert names(tree) == ["notes/", "a.md", "b.md"]
    assert tree.selected == 0


def test_expand_loads_children_lazily() -> None:
    tree = make_tree()
    assert tree.items[0].expanded is False

    tree.expand(0)

    assert names(tree) == ["notes/", "  c.md", "a.md", "b.md"]
    tree.select(1)
    tree.select_parent()
    assert tree.selected == 0

    tree.toggle(0)
    assert names(tree) == ["notes/", "a.md", "b.md"]


def test_empty_tree_has_no_selection() -> None:
    tree = make_tree(FakeWorkspace())

    assert tree.items == []
    assert tree.selected is None
    tree.move_selection(1)
    assert tree.selected is None


def test_sort_toggles_direction_and_key() -> None:
    tree = make_tree()

    assert tree.toggle_sort("name") is False
    assert names(tree) == ["notes/", "b.md", "a.md"]

    assert tree.toggle_sort("modified") is True
    assert names(tree) == ["notes/", "b.md", "a.md"]
    assert tree.toggle_sort("modified") is False
    assert names(tree) == ["notes/", "a.md", "b.md"]


def test_resize_is_clamped_and_blocked_in_full_screen() -> None:
    tree = make_tree()

    assert tree.resize(5) == 25
    assert tree.resize(100) == 50
    assert tree.resize(-100) == 10

    tree.toggle_full_screen()
    assert tree.resize(5) == 10


def test_file_paths_skip_directories() -> None:
    tree = make_tree()

    assert tree.file_paths(2, 0) == ["a.md", "b.md"]


def test_target_dir_for_directory_and_file() -> None:
    tree = make_tree()
    tree.expand(0)

    assert tree.target_dir() == "notes"
    tree.select(1)
    assert tree.target_dir() == "notes"
    tree.select(2)
    assert tree.target_dir() == ""


def test_rebuild_keeps_expansion_and_selection() -> None:
    workspace = make_workspace()
    tree = make_tree(workspace)
    tree.expand(0)
    tree.select(3)
    workspace.files["0.md"] = 0.0

    tree.rebuild()

    assert names(tree) == ["notes/", "  c.md", "0.md", "a.md", "b.md"]
    assert tree.selected_item.path == "b.md"


def test_operations_delete_and_create() -> None:
    workspace = make_workspace()
    indexer = FakeIndexer()
    tree = make_tree(workspace)
    ops = TreeOperations(tree, workspace, indexer)

    assert ops.delete_files(["a.md"]) == ["a.md"]
    assert indexer.removed == [note("a.md")]

    tree.select(0)
    assert ops.create_file("idea") == "Created new file"
    assert "notes/idea.md" in workspace.files
    assert indexer.indexed == [note("notes/idea.md")]


def test_operations_rename_keeps_extension_as_typed() -> None:
    workspace = make_workspace()
    indexer = FakeIndexer()
    tree = make_tree(workspace)
    ops = TreeOperations(tree, workspace, indexer)
    tree.select(1)

    assert ops.rename_selected("z.md") == "Renamed to z.md"

    assert "z.md" in workspace.files and "a.md" not in workspace.files
    assert indexer.removed == [note("a.md")]
    assert indexer.indexed == [note("z.md")]


def test_cut_paste_moves_and_clears_clipboard() -> None:
    workspace = make_workspace()
    indexer = FakeIndexer()
    tree = make_tree(workspace)
    ops = TreeOperations(tree, workspace, indexer)

    tree.clipboard.cut(["a.md"])
    tree.select(0)

    assert ops.paste() == "Pasted (moved) from buffer"
    assert "notes/a.md" in workspace.files and "a.md" not in workspace.files
    assert tree.clipboard.is_empty()
    assert ops.paste() == "No paths in buffer"


def test_copy_paste_keeps_clipboard() -> None:
    workspace = make_workspace()
    tree = make_tree(workspace)
    ops = TreeOperations(tree, workspace, FakeIndexer())

    tree.clipboard.copy(["b.md"])
    tree.select(0)

    assert ops.paste() == "Pasted (cloned) from buffer"
    assert {"b.md", "notes/b.md"} <= set(workspace.files)
    assert tree.clipboard.paths == ["b.md"]


# -- key flows --------------------------------------------------------------


def tree_session(workspace: FakeWorkspace | None = None, indexer: FakeIndexer | None = None):
    session = make_session(
        store=FakeStore({note("start.md"): ""}),
        workspace=workspace or make_workspace(),
        indexer=indexer,
    )
    result = press(session, "\\", "t")
    return session, result


def test_enter_and_leave_tree() -> None:
    session, result = tree_session()

    assert result.message == "Entered File Tree mode"
    assert session.mode_name == "file_tree"
    assert session.file_tree.loaded

    press(session, "ESC")
    assert session.mode_name == "normal"


def test_enter_opens_file_and_returns_to_normal() -> None:
    session, _ = tree_session()
    press(session, "DOWN")

    result = press(session, "ENTER")

    assert result.message == "Opened a.md"
    assert session.mode_name == "normal"
    assert session.identity == note("a.md")
    assert len(session.history) == 2


def test_enter_on_directory_toggles() -> None:
    session, _ = tree_session()

    press(session, "ENTER")
    assert names(session.file_tree)[1] == "  c.md"

    press(session, "DOWN", "LEFT")
    assert session.file_tree.selected == 0
    press(session, "LEFT")
    assert names(session.file_tree) == ["notes/", "a.md", "b.md"]


def test_new_file_prompt_returns_to_tree() -> None:
    workspace = make_workspace()
    session, _ = tree_session(workspace)
    press(session, "DOWN")

    press(session, "n")
    assert isinstance(session.state, CommandState)
    assert session.state.text == "new "

    type_text(session, "idea")
    result = press(session, "ENTER")

    assert result.message == "Created new file"
    assert session.mode_name == "file_tree"
    assert "idea.md" in workspace.files


def test_rename_prompt() -> None:
    workspace = make_workspace()
    session, _ = tree_session(workspace)
    press(session, "DOWN")

    press(session, "r")
    type_text(session, "renamed.md")
    result = press(session, "ENTER")

    assert result.message == "Renamed to renamed.md"
    assert "renamed.md" in workspace.files


def test_delete_directory_is_refused() -> None:
    workspace = make_workspace()
    session, _ = tree_session(workspace)

    result = press(session, "d")

    assert result.message == "Cannot delete directories"
    assert "notes" in workspace.dirs


def test_copy_then_paste_into_directory() -> None:
    workspace = make_workspace()
    session, _ = tree_session(workspace)
    press(session, "DOWN")

    assert press(session, "y").message == "Copied 1 paths to buffer"
    press(session, "UP")
    assert press(session, "p").message == "Pasted (cloned) from buffer"

    assert "notes/a.md" in workspace.files


def test_range_delete() -> None:
    workspace = make_workspace()
    indexer = FakeIndexer()
    session, _ = tree_session(workspace, indexer)
    press(session, "DOWN")

    press(session, "v")
    assert isinstance(session.state, FileTreeVisualState)
    assert session.state.anchor == 1
    press(session, "DOWN")
    result = press(session, "d")

    assert result.message == "Deleted 2 files"
    assert session.mode_name == "file_tree"
    assert set(workspace.files) == {"notes/c.md"}
    assert indexer.removed == [note("a.md"), note("b.md")]


def test_range_rename_needs_single_row() -> None:
    session, _ = tree_session()
    press(session, "DOWN", "v", "DOWN")

    result = press(session, "r")

    assert result.message == "Rename only for single file"
    assert session.mode_name == "file_tree_visual"


def test_layout_and_sort_keys() -> None:
    session, _ = tree_session()
    tree = session.file_tree

    press(session, ">")
    assert tree.width == 25
    press(session, "<", "<")
    assert tree.width == 15

    assert press(session, "f").message == "Full-screen FileTree"
    assert press(session, "f").message == "Split FileTree"

    assert press(session, "o", "c").message == "Sorted by modification time (ascending)"
    assert press(session, "o", "n").message == "Sorted by name (ascending)"
    assert press(session, "o", "n").message == "Sorted by name (descending)"


def open_from_tree(workspace: FakeWorkspace, store: FakeStore):
    session = make_session(store=store, workspace=workspace)
    press(session, "\\", "t")
    session.file_tree.select(1)
    press(session, "ENTER")
    assert session.identity == note("a.md")
    press(session, "\\", "t")
    session.file_tree.select(1)
    return session


def test_deleting_open_document_clears_identity() -> None:
    workspace = make_workspace()
    store = FakeStore({note("start.md"): "", note("a.md"): "alpha"})
    session = open_from_tree(workspace, store)

    press(session, "d")

    assert session.identity is None
    assert session.buffer.to_text() == "alpha"
    press(session, "ESC", ":", "w", "ENTER")
    assert session.status == "No document open"
    assert note("a.md") not in store.saved


def test_renaming_open_document_follows_new_path() -> None:
    workspace = make_workspace()
    store = FakeStore({note("start.md"): "", note("a.md"): "alpha"})
    session = open_from_tree(workspace, store)

    press(session, "r")
    type_text(session, "z.md")
    press(session, "ENTER")

    assert session.identity == note("z.md")
    assert [entry.identity for entry in session.history.entries()] == [
        note("start.md"),
        note("z.md"),
    ]
    session.save()
    assert store.saved == [note("z.md")]
