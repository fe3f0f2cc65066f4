"""Textual adapter that drives an EditorSession and pushes updates to UI hooks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from notevim.buffer import BufferMirror
from notevim.modes import KeyInput, ModeResult, SequenceMode
from notevim.modes.states import (
    CommandState,
    CompletionState,
    FileTreeState,
    FileTreeVisualState,
    SearchState,
    TagFilesState,
)
from notevim.runtime import telemetry
from notevim.session import EditorSession

NAMED_KEYS: Dict[str, str] = {
    "escape": "ESC",
    "enter": "ENTER",
    "return": "ENTER",
    "backspace": "BACKSPACE",
    "delete": "DELETE",
    "tab": "TAB",
    "up": "UP",
    "down": "DOWN",
    "left": "LEFT",
    "right": "RIGHT",
    "home": "HOME",
    "end": "END",
}


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class Panel:
    """A list shown beside or below the buffer: tree, search results or suggestions."""

    title: str
    rows: List[str]
    selected: Optional[int] = None
    anchor: Optional[int] = None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[BufferMirror], None]
    update_status: Callable[[str], None] = _noop
    show_command: Callable[[str], None] = _noop
    show_panel: Callable[[Optional[Panel]], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    request_quit: Callable[[], None] = _noop


def key_from_textual(key: str, character: Optional[str] = None) -> Optional[KeyInput]:
    """Translate a Textual key name such as ``ctrl+left`` into a ``KeyInput``."""

    parts = key.split("+")
    base = parts[-1]
    modifiers = tuple(part for part in parts[:-1] if part != "shift")
    if "ctrl" not in modifiers and character and len(character) == 1 and character.isprintable():
        return KeyInput(key=character, text=character)
    named = NAMED_KEYS.get(base.lower())
    if named is not None:
        return KeyInput(key=named, modifiers=modifiers)
    if len(base) == 1:
        return KeyInput(key=base, modifiers=modifiers)
    return None


def panel_for(session: EditorSession) -> Optional[Panel]:
    state = session.state
    if isinstance(state, CompletionState):
        return Panel(
            title=f"Completing {state.kind}: {state.query}",
            rows=list(state.suggestions),
            selected=state.selected,
        )
    if isinstance(state, SearchState):
        return Panel(
            title=f"Search {state.kind}: {state.target or state.query}",
            rows=[hit.label for hit in state.results],
            selected=state.selected,
        )
    if isinstance(state, TagFilesState):
        return Panel(
            title=f"Files tagged '{state.tag}'",
            rows=[hit.label for hit in state.files],
            selected=state.selected,
        )
    if isinstance(state, (FileTreeState, FileTreeVisualState)):
        tree = session.file_tree
        anchor = state.anchor if isinstance(state, FileTreeVisualState) else None
        return Panel(
            title="Files",
            rows=[item.display for item in tree.items],
            selected=tree.selected,
            anchor=anchor,
        )
    return None


class TextualNoteAdapter:
    """Bridges an EditorSession and its bus events to a Textual-friendly surface."""

    def __init__(self, session: EditorSession, hooks: TextualUIHooks) -> None:
        self.session = session
        self.hooks = hooks
        self.logger = telemetry.get_logger("notevim.adapters.textual")
        self._subscribe_events()
        self.refresh()

    def handle_textual_key(
        self,
        key: str,
        *,
        character: Optional[str] = None,
    ) -> Optional[ModeResult]:
        """Translate a Textual key event and dispatch it to the session."""

        key_input = key_from_textual(key, character)
        if key_input is None:
            return None
        return self.dispatch(key_input)

    def dispatch(self, key_input: KeyInput) -> ModeResult:
        result = self.session.handle_key(key_input)
        telemetry.record_event(
            "adapter.key",
            level="debug",
            data={
                "key": key_input.key,
                "mode": self.session.mode_name,
                "status": result.status,
            },
        )
        self.refresh()
        if self.session.should_quit:
            self.hooks.request_quit()
        return result

    def refresh(self) -> None:
        session = self.session
        self.hooks.update_buffer(session.buffer.mirror(attributes={"mode": session.mode_name}))
        self.hooks.update_status(self.status_line())
        self.hooks.show_command(self.command_line())
        self.hooks.show_panel(panel_for(session))

    def status_line(self) -> str:
        session = self.session
        mode = session.modes.active_mode
        label = mode.label if mode else ""
        pending = mode.pending_sequence if isinstance(mode, SequenceMode) else ""
        row, col = session.buffer.cursor
        parts = [label, pending, session.status, f"{row + 1}:{col + 1}"]
        if session.buffer.dirty:
            parts.append("[+]")
        return " | ".join(part for part in parts if part)

    def command_line(self) -> str:
        state = self.session.state
        if isinstance(state, CommandState):
            return f":{state.text}"
        return ""

    def _subscribe_events(self) -> None:
        bus = self.session.bus
        for event in (
            "visual.selection",
            "visual.yank",
            "command.start",
            "command.end",
            "completion.accept",
            "mode.switch",
        ):
            bus.subscribe(event, lambda payload, name=event: self.hooks.handle_event(name, payload))


def panel_rows(panel: Panel) -> Iterable[Tuple[int, str, bool]]:
    """Rows with their index and whether they are highlighted."""

    low, high = panel.selected, panel.selected
    if panel.anchor is not None and panel.selected is not None:
        low, high = min(panel.anchor, panel.selected), max(panel.anchor, panel.selected)
    for index, row in enumerate(panel.rows):
        highlighted = low is not None and high is not None and low <= index <= high
        yield index, row, highlighted


__all__ = [
    "NAMED_KEYS",
    "Panel",
    "TextualNoteAdapter",
    "TextualUIHooks",
    "key_from_textual",
    "panel_for",
    "panel_rows",
]
