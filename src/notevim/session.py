"""Editing session: buffer, modes, history and collaborators wired together."""

from __future__ import annotations

from datetime import date, timedelta
from functools import partial
from pathlib import Path, PurePath
from typing import Callable, List, Optional, Tuple

from notevim.buffer import Buffer, RegisterBank
from notevim.errors import DocumentIOError, EditorError, InvalidLinkError
from notevim.filetree import FileTree, TreeOperations
from notevim.keymaps import KeymapRegistry
from notevim.links import (
    completion_query,
    dedupe_backlinks,
    extract_wikilink,
    strip_incomplete_link,
)
from notevim.modes import DEFAULT_MODES, KeyInput, ModeBus, ModeContext, ModeResult
from notevim.modes.mode_manager import ModeManager
from notevim.modes.states import CompletionState, SearchState, TagFilesState
from notevim.navigation import NavigationHistory
from notevim.runtime import telemetry
from notevim.runtime.settings import EditorSettings
from notevim.services.protocols import (
    Backlink,
    CompletionProvider,
    DocumentStore,
    Indexer,
    LinkIndex,
    SearchKind,
    SuggestionKind,
    Workspace,
)

NOTE_SUFFIX = ".md"


class EditorSession:
    """One editor instance bound to a workspace.

    Collaborators are injected so the whole state machine runs against
    in-memory fakes as easily as against the filesystem, SQLite index and
    external scanner. Key events go through :meth:`handle_key`; actions
    reach back into the session for anything that touches documents.
    """

    def __init__(
        self,
        settings: EditorSettings,
        *,
        store: DocumentStore,
        index: LinkIndex,
        indexer: Indexer,
        workspace: Workspace,
        completions: Optional[CompletionProvider] = None,
        keymap_registry: Optional[KeymapRegistry] = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.settings = settings
        self.store = store
        self.index = index
        self.indexer = indexer
        self.workspace = workspace
        self.completions: CompletionProvider = completions or index  # type: ignore[assignment]
        self._today = today
        self.logger = telemetry.get_logger("notevim.session")

        self.buffer = Buffer(name="default")
        self.registers: RegisterBank = self.buffer.registers
        self.bus = ModeBus()
        self.context = ModeContext(
            buffer=self.buffer,
            registers=self.registers,
            bus=self.bus,
            session=self,
        )
        self.history = NavigationHistory()
        self._file_tree = FileTree(
            workspace,
            width=settings.tree_width_percent,
            width_min=settings.tree_width_min,
            width_max=settings.tree_width_max,
        )
        self._tree_ops = TreeOperations(
            self._file_tree, workspace, indexer, on_relocate=self._document_relocated
        )

        self.modes = ModeManager(self.context, keymap_registry=keymap_registry)
        for mode_cls in DEFAULT_MODES:
            self.modes.register_mode(mode_cls)

        self.identity: Optional[str] = None
        self.tags: List[str] = []
        self.backlinks: List[Backlink] = []
        self.status = "Normal"
        self.should_quit = False

    # -- properties -------------------------------------------------------

    @property
    def file_tree(self) -> FileTree:
        return self._file_tree

    @property
    def tree_ops(self) -> TreeOperations:
        return self._tree_ops

    @property
    def mode_name(self) -> str:
        return self.modes.active_name or "normal"

    @property
    def state(self):
        return self.context.state

    # -- lifecycle --------------------------------------------------------

    def start(self, identity: str) -> None:
        self.open_document(identity)
        self.status = "Normal"

    def request_quit(self) -> None:
        self.should_quit = True

    def handle_key(self, key: KeyInput) -> ModeResult:
        result = self.modes.handle_key(key)
        if result.message:
            self.status = result.message
        return result

    # -- documents --------------------------------------------------------

    def _name(self, identity: str) -> str:
        return PurePath(identity).name

    def open_document(self, identity: str, *, push: bool = True) -> str:
        """Load ``identity`` into the buffer; ``push`` records it in history."""

        with telemetry.span(
            "session::open", component="session", metadata={"identity": identity}
        ):
            content = self.store.load(identity)
            if push:
                if self.history.current is not None:
                    self.history.remember(self.buffer.cursor)
                self.history.push(identity)
            self.buffer.load(content, name=identity)
            self.identity = identity
            self.refresh_metadata()
        return f"Opened {self._name(identity)}"

    def _traverse(self, step: int) -> Tuple[bool, str]:
        target_index = self.history.index + step
        entries = self.history.entries()
        if self.history.current is None or not 0 <= target_index < len(entries):
            return False, "No previous file in history" if step < 0 else "No next file in history"
        # Load before moving the index so a failed read leaves history intact.
        content = self.store.load(entries[target_index].identity)
        self.history.remember(self.buffer.cursor)
        if step < 0:
            self.history.back()
        else:
            self.history.forward()
        entry = self.history.entries()[target_index]
        self.buffer.load(content, name=entry.identity)
        self.buffer.set_cursor(*entry.position)
        self.identity = entry.identity
        self.refresh_metadata()
        telemetry.record_event(
            "session.history", level="debug", data={"identity": entry.identity, "step": step}
        )
        return True, f"Opened {self._name(entry.identity)}"

    def navigate_back(self) -> Tuple[bool, str]:
        return self._traverse(-1)

    def navigate_forward(self) -> Tuple[bool, str]:
        return self._traverse(1)

    def save(self) -> str:
        if self.identity is None:
            raise DocumentIOError("No document open")
        with telemetry.span(
            "session::save", component="session", metadata={"identity": self.identity}
        ):
            self.store.save(self.identity, self.buffer.to_text())
            self.buffer.mark_saved()
            self.indexer.index(self.identity)
            self.refresh_metadata()
        return "Saved"

    def _document_relocated(self, old: str, new: Optional[str]) -> None:
        """Follow a tree rename or move of ``old``; ``new`` is ``None`` after a delete.

        A deleted open document keeps its text but loses its identity, so
        saving it reports "No document open" instead of recreating the file.
        """

        if new is not None:
            self.history.rename(old, new)
        if old != self.identity:
            return
        self.identity = new
        if new is not None:
            self.buffer.name = new
        self.refresh_metadata()
        telemetry.record_event(
            "session.relocate", data={"from": old, "to": new or ""}
        )

    def refresh_metadata(self) -> None:
        if self.identity is None:
            self.tags, self.backlinks = [], []
            return
        self.tags = list(self.index.tags_for(self.identity))
        self.backlinks = dedupe_backlinks(self.index.backlinks_for(self.identity))

    # -- links ------------------------------------------------------------

    def follow_link(self) -> str:
        """Follow the backlink, wikilink or tag found on the cursor line."""

        row = self.buffer.cursor[0]
        original = self.buffer.line(row)
        line = strip_incomplete_link(original)
        follow = self._link_target(line)
        if follow is None:
            raise InvalidLinkError("No valid wikilink found")

        if line == original:
            return follow()
        self.buffer.replace_line(row, line)
        self.buffer.set_cursor(row, 0)
        try:
            return follow()
        except EditorError:
            self.buffer.undo()
            raise

    def _link_target(self, line: str) -> Optional[Callable[[], str]]:
        for backlink in self.backlinks:
            if backlink.text in line:
                return partial(self.open_document, backlink.identity)
        wikilink = extract_wikilink(line)
        if wikilink is not None:
            return partial(self.open_wikilink, wikilink)
        for tag in self.tags:
            if tag in line:
                return partial(self._describe_tag, tag)
        return None

    def _describe_tag(self, tag: str) -> str:
        names = [hit.label for hit in self.index.files_for_tag(tag)]
        return f"Files with tag '{tag}': {', '.join(names)}"

    def open_wikilink(self, text: str) -> str:
        """Open the note ``text`` names, creating and indexing it when unknown."""

        identity = self.index.resolve_link(text)
        if identity is None:
            relative = text if text.endswith(NOTE_SUFFIX) else f"{text}{NOTE_SUFFIX}"
            identity = str(Path(self.settings.base_dir) / relative)
            if not self.store.exists(identity):
                self.store.create(identity)
            self.indexer.index(identity)
            telemetry.record_event("session.create_note", data={"identity": identity})
        return self.open_document(identity)

    def open_daily_note(self, offset_days: int) -> str:
        day = self._today() + timedelta(days=offset_days)
        return self.open_wikilink(day.strftime(self.settings.daily_note_template))

    # -- search -----------------------------------------------------------

    def begin_search(self, kind: SearchKind) -> SearchState:
        state = SearchState(kind=kind)
        if kind == "backlinks":
            state.target = self._backlink_target()
        self.run_search(state)
        return state

    def _backlink_target(self) -> Optional[str]:
        wikilink = extract_wikilink(self.buffer.line())
        if wikilink is not None:
            return wikilink
        if self.identity is None:
            return None
        return self.index.file_name(self.identity) or self._name(self.identity)

    def run_search(self, state: SearchState) -> None:
        query = (state.target or "") if state.kind == "backlinks" else state.query
        with telemetry.span(
            "session::search",
            component="session",
            metadata={"kind": state.kind, "query": query},
        ):
            state.results = list(self.index.search(query, state.kind, exclude=self.identity))
        state.selected = 0 if state.results else None

    def tag_files(self, tag: str) -> TagFilesState:
        return TagFilesState(tag=tag, files=list(self.index.files_for_tag(tag)))

    # -- completion -------------------------------------------------------

    def suggest(self, query: str, kind: SuggestionKind) -> List[str]:
        if len(query) < self.settings.completion_min_length:
            return []
        return list(
            self.completions.suggest(query, kind, limit=self.settings.completion_limit)
        )

    def begin_completion(self, kind: SuggestionKind) -> CompletionState:
        state = CompletionState(kind=kind)
        self.refresh_completion(state)
        return state

    def refresh_completion(self, state: CompletionState) -> None:
        row, col = self.buffer.cursor
        state.query = completion_query(self.buffer.line(row), col, state.kind) or ""
        state.suggestions = self.suggest(state.query, state.kind)
        state.selected = 0 if state.suggestions else None


__all__ = ["EditorSession"]
