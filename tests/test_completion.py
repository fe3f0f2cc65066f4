from __future__ import annotations

from notevim.modes import CompletionState

from fakes import FakeIndex, make_session, press, type_text


def completing_session(index: FakeIndex):
    session = make_session(index=index)
    press(session, "i")
    return session


def test_hash_opens_tag_completion() -> None:
    index = FakeIndex()
    session = completing_session(index)

    result = type_text(session, "#")

    assert result.status == "completion_start"
    assert session.mode_name == "complete"
    assert isinstance(session.state, CompletionState)
    assert session.state.kind == "tag"


def test_double_bracket_opens_file_completion() -> None:
    session = completing_session(FakeIndex())

    type_text(session, "see [")
    assert session.mode_name == "insert"
    type_text(session, "[")

    assert session.mode_name == "complete"
    assert session.state.kind == "file"


def test_query_below_minimum_length_is_not_sent() -> None:
    index = FakeIndex()
    index.suggestions["tag"] = ["tag1", "tasks", "other"]
    session = completing_session(index)

    type_text(session, "#t")
    assert index.suggest_calls == []
    assert session.state.suggestions == []

    type_text(session, "a")

    assert index.suggest_calls == [("ta", "tag")]
    assert session.state.query == "ta"
    assert session.state.suggestions == ["tag1", "tasks"]
    assert session.state.selected == 0


def test_backspace_requeries_then_closes_at_trigger() -> None:
    index = FakeIndex()
    index.suggestions["tag"] = ["tasks"]
    session = completing_session(index)
    type_text(session, "#ta")
    calls = len(index.suggest_calls)

    press(session, "BACKSPACE")
    assert session.mode_name == "complete"
    assert session.state.query == "t"
    assert session.state.suggestions == []
    assert len(index.suggest_calls) == calls

    press(session, "BACKSPACE")
    assert session.mode_name == "complete"
    assert session.buffer.to_text() == "#"

    result = press(session, "BACKSPACE")
    assert result.status == "completion_cancel"
    assert session.mode_name == "insert"
    assert session.buffer.to_text() == ""


def test_accept_replaces_trigger_and_query() -> None:
    index = FakeIndex()
    index.suggestions["tag"] = ["tag1", "tasks"]
    accepted = []
    session = completing_session(index)
    session.bus.subscribe("completion.accept", accepted.append)
    type_text(session, "todo #ta")

    press(session, "DOWN")
    result = press(session, "ENTER")

    assert result.status == "completion_accept"
    assert session.mode_name == "insert"
    assert session.buffer.to_text() == "todo #tasks"
    assert session.buffer.cursor == (0, len("todo #tasks"))
    assert accepted == [{"kind": "tag", "suggestion": "tasks"}]


def test_accept_file_suggestion_wraps_in_brackets() -> None:
    index = FakeIndex()
    index.suggestions["file"] = ["alpha", "alps"]
    session = completing_session(index)

    type_text(session, "[[al")
    press(session, "ENTER")

    assert session.buffer.to_text() == "[[alpha]]"


def test_selection_does_not_wrap() -> None:
    index = FakeIndex()
    index.suggestions["tag"] = ["tag1", "tag2"]
    session = completing_session(index)
    type_text(session, "#tag")

    press(session, "UP")
    assert session.state.selected == 0
    press(session, "DOWN", "DOWN", "DOWN")
    assert session.state.selected == 1


def test_escape_keeps_typed_text() -> None:
    index = FakeIndex()
    index.suggestions["tag"] = ["tasks"]
    session = completing_session(index)
    type_text(session, "#ta")

    press(session, "ESC")

    assert session.mode_name == "insert"
    assert session.buffer.to_text() == "#ta"


def test_enter_without_suggestions_leaves_text() -> None:
    session = completing_session(FakeIndex())
    type_text(session, "#zz")

    press(session, "ENTER")

    assert session.mode_name == "insert"
    assert session.buffer.to_text() == "#zz"


def test_suggestions_capped_by_limit() -> None:
    index = FakeIndex()
    index.suggestions["tag"] = [f"tag{n}" for n in range(30)]
    session = completing_session(index)

    type_text(session, "#tag")

    assert len(session.state.suggestions) == session.settings.completion_limit
