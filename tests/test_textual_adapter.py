from __future__ import annotations

from typing import List, Optional

from notevim.adapters.textual import (
    Panel,
    TextualNoteAdapter,
    TextualUIHooks,
    key_from_textual,
    panel_for,
)
from notevim.adapters.textual.app import EXIT_BAD_BASE_DIR, main, render_buffer
from notevim.adapters.textual.controller import panel_rows
from notevim.buffer import BufferMirror
from notevim.services.protocols import SearchHit

from fakes import FakeIndex, FakeStore, FakeWorkspace, make_session, note


class Recorder:
    def __init__(self) -> None:
        self.buffers: List[str] = []
        self.statuses: List[str] = []
        self.commands: List[str] = []
        self.panels: List[Optional[Panel]] = []
        self.events: List[tuple] = []
        self.quit_requests = 0

    def hooks(self) -> TextualUIHooks:
        return TextualUIHooks(
            update_buffer=lambda mirror: self.buffers.append(mirror.text),
            update_status=self.statuses.append,
            show_command=self.commands.append,
            show_panel=self.panels.append,
            handle_event=lambda name, payload: self.events.append((name, payload)),
            request_quit=self._quit,
        )

    def _quit(self) -> None:
        self.quit_requests += 1


def make_adapter(**session_kwargs):
    recorder = Recorder()
    session = make_session(**session_kwargs)
    return TextualNoteAdapter(session, recorder.hooks()), recorder


def test_key_translation() -> None:
    assert key_from_textual("i").key == "i"
    assert key_from_textual("shift+a", "A").text == "A"
    assert key_from_textual("escape").key == "ESC"

    chord = key_from_textual("ctrl+v")
    assert chord.key == "v" and chord.modifiers == ("ctrl",)

    word = key_from_textual("ctrl+left")
    assert word.key == "LEFT" and word.ctrl

    assert key_from_textual("f12") is None


def test_adapter_pushes_buffer_and_status() -> None:
    adapter, recorder = make_adapter(store=FakeStore({note("start.md"): "abc"}))

    adapter.handle_textual_key("i", character="i")
    adapter.handle_textual_key("x", character="x")

    assert recorder.buffers[-1] == "xabc"
    assert recorder.statuses[-1] == "Insert | Insert | 1:2 | [+]"
    assert ("mode.switch", {"from": "normal", "to": "insert"}) in recorder.events


def test_status_line_shows_pending_sequence() -> None:
    adapter, recorder = make_adapter()

    adapter.handle_textual_key("backslash", character="\\")
    adapter.handle_textual_key("o", character="o")
    assert "\\o" in recorder.statuses[-1].split(" | ")

    adapter.handle_textual_key("escape")
    assert "\\o" not in recorder.statuses[-1].split(" | ")


def test_adapter_shows_command_line_and_quits() -> None:
    adapter, recorder = make_adapter()

    adapter.handle_textual_key(":", character=":")
    adapter.handle_textual_key("q", character="q")
    assert recorder.commands[-1] == ":q"

    adapter.handle_textual_key("enter")

    assert recorder.commands[-1] == ""
    assert recorder.quit_requests == 1
    assert any(name == "command.end" for name, _ in recorder.events)


def test_unknown_key_is_ignored() -> None:
    adapter, recorder = make_adapter()
    before = len(recorder.buffers)

    assert adapter.handle_textual_key("f12") is None
    assert len(recorder.buffers) == before


def test_panel_for_search_and_tree() -> None:
    index = FakeIndex()
    index.search_results["files"] = [SearchHit("a.md", note("a.md"))]
    workspace = FakeWorkspace(files={"a.md": 0.0, "b.md": 0.0})
    adapter, recorder = make_adapter(index=index, workspace=workspace)
    assert recorder.panels[-1] is None

    adapter.handle_textual_key("backslash", character="\\")
    adapter.handle_textual_key("f", character="f")
    panel = panel_for(adapter.session)
    assert panel.title == "Search files: "
    assert panel.rows == ["a.md"]

    adapter.handle_textual_key("escape")
    adapter.handle_textual_key("backslash", character="\\")
    adapter.handle_textual_key("t", character="t")
    adapter.handle_textual_key("v", character="v")
    adapter.handle_textual_key("down")

    panel = recorder.panels[-1]
    assert panel.rows == ["a.md", "b.md"]
    assert [highlighted for _, _, highlighted in panel_rows(panel)] == [True, True]


def test_render_buffer_marks_cursor() -> None:
    mirror = BufferMirror(text="ab\ncd", cursor=(1, 1), selection=None, cursor_byte=1)

    assert render_buffer(mirror) == "ab\nc▏d"


def test_main_rejects_missing_base_dir(tmp_path, capsys) -> None:
    code = main([str(tmp_path / "note.md"), str(tmp_path / "missing")])

    assert code == EXIT_BAD_BASE_DIR
    assert "does not exist" in capsys.readouterr().err
