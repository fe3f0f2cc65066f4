from __future__ import annotations

import pytest

from notevim.errors import DocumentIOError
from notevim.modes import SearchState, TagFilesState
from notevim.services.protocols import Backlink, SearchHit

from fakes import FakeIndex, FakeIndexer, FakeStore, make_session, note, press, type_text


def make_store(start_text: str = "", **others: str) -> FakeStore:
    documents = {note("start.md"): start_text}
    documents.update({note(name): text for name, text in others.items()})
    return FakeStore(documents)


def test_follow_wikilink_to_known_note() -> None:
    index = FakeIndex()
    index.links["alpha.md"] = note("alpha.md")
    store = make_store("go to [[alpha]] now", **{"alpha.md": "# Alpha"})
    session = make_session(store=store, index=index)

    result = press(session, "ENTER")

    assert result.message == "Opened alpha.md"
    assert session.identity == note("alpha.md")
    assert session.buffer.to_text() == "# Alpha"
    assert len(session.history) == 2


def test_follow_missing_wikilink_creates_and_indexes() -> None:
    store = make_store("[[fresh idea]]")
    indexer = FakeIndexer()
    session = make_session(store=store, indexer=indexer)

    press(session, "ENTER")

    created = note("fresh idea.md")
    assert session.identity == created
    assert store.documents[created] == ""
    assert indexer.indexed == [created]


def test_follow_backlink_prefers_shortest_target_name() -> None:
    index = FakeIndex()
    index.backlinks[note("start.md")] = [
        Backlink("project notes", note("archive/project-notes-old.md")),
        Backlink("project notes", note("pn.md")),
    ]
    store = make_store("intro\nsee project notes here", **{"pn.md": "pn"})
    session = make_session(store=store, index=index)
    assert session.backlinks == [Backlink("project notes", note("pn.md"))]
    press(session, "j")

    press(session, "ENTER")

    assert session.identity == note("pn.md")


def test_incomplete_link_is_stripped_before_following() -> None:
    index = FakeIndex()
    index.tags[note("start.md")] = ["todo"]
    index.tag_files["todo"] = [
        SearchHit("a.md", note("a.md")),
        SearchHit("b.md", note("b.md")),
    ]
    session = make_session(store=make_store("#todo [[half"), index=index)

    result = press(session, "ENTER")

    assert session.buffer.to_text() == "#todo "
    assert result.message == "Files with tag 'todo': a.md, b.md"
    assert session.identity == note("start.md")

    press(session, "u")
    assert session.buffer.to_text() == "#todo [[half"


def test_unresolvable_incomplete_link_leaves_line_alone() -> None:
    session = make_session(store=make_store("plain [[half"))

    result = press(session, "ENTER")

    assert result.status == "error"
    assert result.message == "No valid wikilink found"
    assert session.buffer.to_text() == "plain [[half"
    assert session.buffer.dirty is False
    assert session.buffer.undo() is False


def test_failed_follow_restores_stripped_line() -> None:
    index = FakeIndex()
    index.backlinks[note("start.md")] = [Backlink("alpha", note("alpha.md"))]
    store = make_store("see alpha [[half", **{"alpha.md": "# Alpha"})
    store.unreadable.add(note("alpha.md"))
    session = make_session(store=store, index=index)

    result = press(session, "ENTER")

    assert result.status == "error"
    assert session.identity == note("start.md")
    assert session.buffer.to_text() == "see alpha [[half"


def test_scanner_failure_is_reported_and_mode_kept() -> None:
    indexer = FakeIndexer()
    indexer.fail_with = "cannot parse"
    session = make_session(store=make_store("[[new]]"), indexer=indexer)

    result = press(session, "ENTER")

    assert result.status == "error"
    assert result.message == "Markdown scanner error: cannot parse"
    assert session.mode_name == "normal"
    assert session.identity == note("start.md")


@pytest.mark.parametrize(
    "keys, expected, message",
    [
        ("\\oot", "Every day info/2024-03-15.md", "Opened today's file"),
        ("\\ooy", "Every day info/2024-03-14.md", "Opened yesterday's file"),
        ("\\ooT", "Every day info/2024-03-16.md", "Opened tomorrow's file"),
    ],
)
def test_daily_notes(keys, expected, message) -> None:
    store = make_store()
    session = make_session(store=store)

    result = press(session, *keys)

    assert result.message == message
    assert session.identity == note(expected)
    assert note(expected) in store.documents


def test_existing_daily_note_is_not_recreated() -> None:
    index = FakeIndex()
    index.links["2024-03-15.md"] = note("Every day info/2024-03-15.md")
    indexer = FakeIndexer()
    store = make_store(**{"Every day info/2024-03-15.md": "today"})
    session = make_session(store=store, index=index, indexer=indexer)

    press(session, "\\", "o", "o", "t")

    assert session.buffer.to_text() == "today"
    assert indexer.indexed == []


def test_file_search_filters_and_opens() -> None:
    index = FakeIndex()
    index.search_results["files"] = [
        SearchHit("alpha.md", note("alpha.md")),
        SearchHit("beta.md", note("beta.md")),
    ]
    session = make_session(store=make_store(**{"beta.md": "b"}), index=index)

    result = press(session, "\\", "f")
    assert result.message == "Started files search"
    assert session.mode_name == "search"
    assert len(session.state.results) == 2

    type_text(session, "be")
    assert [hit.label for hit in session.state.results] == ["beta.md"]
    assert session.state.selected == 0

    press(session, "ENTER")
    assert session.mode_name == "normal"
    assert session.identity == note("beta.md")


def test_search_backspace_reruns_query() -> None:
    index = FakeIndex()
    index.search_results["files"] = [
        SearchHit("alpha.md", note("alpha.md")),
        SearchHit("beta.md", note("beta.md")),
    ]
    session = make_session(index=index)
    press(session, "\\", "f")
    type_text(session, "bx")
    assert session.state.results == []
    assert session.state.selected is None

    press(session, "BACKSPACE")

    assert session.state.query == "b"
    assert [hit.label for hit in session.state.results] == ["beta.md"]


def test_search_enter_without_results() -> None:
    session = make_session()
    press(session, "\\", "f")

    result = press(session, "ENTER")

    assert result.message == "No result selected"
    assert session.mode_name == "normal"


def test_tag_search_lists_files_for_tag() -> None:
    index = FakeIndex()
    index.search_results["tags"] = [SearchHit("todo"), SearchHit("idea")]
    index.tag_files["todo"] = [
        SearchHit("x.md", note("x.md")),
        SearchHit("y.md", note("y.md")),
    ]
    session = make_session(store=make_store(**{"y.md": "why"}), index=index)

    press(session, "\\", "o", "t")
    type_text(session, "to")
    result = press(session, "ENTER")

    assert result.message == "Select file for tag 'todo'"
    assert isinstance(session.state, TagFilesState)
    assert session.state.selected == 0

    press(session, "DOWN")
    press(session, "ENTER")

    assert session.mode_name == "normal"
    assert session.identity == note("y.md")


def test_tag_without_files() -> None:
    index = FakeIndex()
    index.search_results["tags"] = [SearchHit("idea")]
    session = make_session(index=index)

    press(session, "\\", "o", "t")
    result = press(session, "ENTER")

    assert result.message == "No files found for tag 'idea'"
    assert session.mode_name == "normal"


def test_backlink_search_uses_file_name_as_fixed_target() -> None:
    index = FakeIndex()
    session = make_session(index=index)

    press(session, "\\", "o", "b")
    assert isinstance(session.state, SearchState)
    assert session.state.target == "start.md"

    type_text(session, "zz")

    assert index.searches[-1] == ("start.md", "backlinks", note("start.md"))


def test_backlink_search_prefers_wikilink_on_line() -> None:
    session = make_session(store=make_store("about [[alpha]]"))

    press(session, "\\", "o", "b")

    assert session.state.target == "alpha"


def test_search_escape_returns_to_normal() -> None:
    session = make_session()
    press(session, "\\", "f")

    press(session, "ESC")

    assert session.mode_name == "normal"


def test_save_reindexes_and_refreshes_tags() -> None:
    index = FakeIndex()
    indexer = FakeIndexer()
    store = make_store("text")
    session = make_session(store=store, index=index, indexer=indexer)
    press(session, "i")
    type_text(session, "more ")
    press(session, "ESC")
    index.tags[note("start.md")] = ["new"]

    assert session.save() == "Saved"

    assert store.documents[note("start.md")] == "more text"
    assert indexer.indexed == [note("start.md")]
    assert session.tags == ["new"]
    assert session.buffer.dirty is False


def test_save_without_document() -> None:
    session = make_session(start=None)

    with pytest.raises(DocumentIOError):
        session.save()


def test_unreadable_document_surfaces_as_error() -> None:
    index = FakeIndex()
    index.links["locked.md"] = note("locked.md")
    store = make_store("[[locked]]")
    store.unreadable.add(note("locked.md"))
    session = make_session(store=store, index=index)

    result = press(session, "ENTER")

    assert result.status == "error"
    assert session.identity == note("start.md")
    assert len(session.history) == 1
