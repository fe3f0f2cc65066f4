"""Executable Textual app that hosts the note editor."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when the app is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Horizontal, Vertical
    from textual.widgets import Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use notevim.adapters.textual.app"
    ) from exc

from notevim.buffer import BufferMirror
from notevim.errors import EditorError
from notevim.runtime import telemetry
from notevim.runtime.settings import EditorSettings
from notevim.services import (
    FileDocumentStore,
    FileWorkspace,
    ScannerIndexer,
    SqliteIndex,
    ensure_schema,
)
from notevim.session import EditorSession

from .controller import Panel, TextualNoteAdapter, TextualUIHooks, panel_rows

EXIT_OK = 0
EXIT_STARTUP_ERROR = 1
EXIT_BAD_BASE_DIR = 2


def build_session(settings: EditorSettings, document: str) -> EditorSession:
    """Wire the filesystem, SQLite index and scanner into a started session.

    A freshly created index database is populated by scanning ``document``.
    """

    workspace = FileWorkspace(settings.base_dir)
    created = ensure_schema(settings.database_path)
    indexer = ScannerIndexer(settings.base_dir, command=settings.scanner_command)
    if created:
        indexer.index(document)
    session = EditorSession(
        settings,
        store=FileDocumentStore(),
        index=SqliteIndex(settings.database_path),
        indexer=indexer,
        workspace=workspace,
    )
    session.start(document)
    return session


def render_buffer(mirror: BufferMirror) -> str:
    lines = mirror.text.split("\n")
    row, col = mirror.cursor
    if 0 <= row < len(lines):
        line = lines[row]
        lines[row] = f"{line[:col]}▏{line[col:]}"
    return "\n".join(lines)


def render_panel(panel: Panel) -> str:
    rows = [panel.title]
    for _index, text, highlighted in panel_rows(panel):
        rows.append(f"> {text}" if highlighted else f"  {text}")
    return "\n".join(rows)


class NoteEditorApp(App[None]):
    """Buffer view with a side panel for the file tree and result lists."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#main-area {
		height: 1fr;
	}

	#side-panel {
		width: 20%;
		border: round $accent;
		padding: 0 1;
		display: none;
	}

	#buffer-view {
		width: 1fr;
		border: round $accent;
		padding: 0 1;
		content-align: left top;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}

	#command-line {
		height: 1;
		background: $surface-darken-2;
		padding: 0 1;
	}
	"""

    BINDINGS = [("ctrl+q", "quit", "Quit")]

    def __init__(self, session: EditorSession) -> None:
        super().__init__()
        self.session = session
        self.adapter: TextualNoteAdapter | None = None
        self._buffer_widget: Static | None = None
        self._panel_widget: Static | None = None
        self._status_widget: Static | None = None
        self._command_widget: Static | None = None

    def compose(self) -> ComposeResult:
        with Vertical():
            with Horizontal(id="main-area"):
                self._panel_widget = Static("", id="side-panel", markup=False)
                yield self._panel_widget
                self._buffer_widget = Static("", id="buffer-view", markup=False)
                yield self._buffer_widget
            self._status_widget = Static("", id="status-line", markup=False)
            self._command_widget = Static("", id="command-line", markup=False)
            yield self._status_widget
            yield self._command_widget

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            show_command=self._show_command,
            show_panel=self._show_panel,
            request_quit=self.exit,
        )
        self.adapter = TextualNoteAdapter(self.session, hooks)

    def on_key(self, event: events.Key) -> None:
        if not self.adapter or event.key == "ctrl+q":
            return
        self.adapter.handle_textual_key(event.key, character=event.character)
        event.stop()

    def _update_buffer(self, mirror: BufferMirror) -> None:
        if self._buffer_widget:
            self._buffer_widget.update(render_buffer(mirror))

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)

    def _show_command(self, command: str) -> None:
        if self._command_widget:
            self._command_widget.update(command)

    def _show_panel(self, panel: Optional[Panel]) -> None:
        widget = self._panel_widget
        if widget is None:
            return
        widget.display = panel is not None
        if panel is None:
            return
        tree = self.session.file_tree
        widget.styles.width = "100%" if tree.full_screen else f"{tree.width}%"
        widget.update(render_panel(panel))


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="notevim",
        description="A terminal vim-like Markdown editor with wikilinks and tags.",
    )
    parser.add_argument("document", help="Path to the Markdown file to edit")
    parser.add_argument(
        "base_dir",
        nargs="?",
        default=None,
        help="Notes directory (defaults to NOTEVIM_BASE_DIR, "
        "Obsidian_valt_main_path or the current directory)",
    )
    parser.add_argument(
        "--log-preset",
        choices=telemetry.PRESETS,
        default=None,
        help="Named telelog preset to use instead of the environment configuration",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)
    settings = EditorSettings.from_env(args.base_dir)
    if not settings.base_dir.is_dir():
        print(f"Base directory '{settings.base_dir}' does not exist", file=sys.stderr)
        return EXIT_BAD_BASE_DIR
    document = str(Path(args.document).resolve())
    try:
        session = build_session(settings, document)
    except EditorError as exc:
        telemetry.record_error(exc, data={"document": document})
        print(str(exc), file=sys.stderr)
        return EXIT_STARTUP_ERROR
    NoteEditorApp(session).run()
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover - manual run
    sys.exit(main())
