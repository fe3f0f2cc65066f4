"""Actions for the search list and the per-tag file list."""

from __future__ import annotations

from notevim.keymaps import ResolutionMatch
from notevim.modes.base_mode import ModeContext, ModeResult, require_session, require_state
from notevim.modes.states import SearchState, TagFilesState, move_index


def _to_normal(message: str = "Normal", status: str = "ok") -> ModeResult:
    return ModeResult(consumed=True, switch_to="normal", status=status, message=message)


def cancel_search(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del context, match
    return _to_normal()


def search_up(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    state = require_state(context, SearchState)
    state.selected = move_index(state.selected, -1, len(state.results))
    return ModeResult(consumed=True, status="search_select")


def search_down(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    state = require_state(context, SearchState)
    state.selected = move_index(state.selected, 1, len(state.results))
    return ModeResult(consumed=True, status="search_select")


def search_backspace(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    state = require_state(context, SearchState)
    state.query = state.query[:-1]
    require_session(context).run_search(state)
    return ModeResult(consumed=True, status="search_query")


def confirm_search(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """Open the selected document, or list the files of the selected tag."""

    del match
    state = require_state(context, SearchState)
    session = require_session(context)
    hit = state.current
    if hit is None:
        return _to_normal("No result selected", status="noop")
    if state.kind == "tags":
        tag_state = session.tag_files(hit.label)
        if not tag_state.files:
            return _to_normal(f"No files found for tag '{hit.label}'", status="noop")
        return ModeResult(
            consumed=True,
            switch_to="tag_files",
            message=f"Select file for tag '{hit.label}'",
            payload=tag_state,
        )
    if hit.identity is None:
        return _to_normal("No result selected", status="noop")
    session.open_document(hit.identity)
    return _to_normal(status="navigate")


def tag_files_up(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    state = require_state(context, TagFilesState)
    state.selected = move_index(state.selected, -1, len(state.files)) or 0
    return ModeResult(consumed=True, status="search_select")


def tag_files_down(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    state = require_state(context, TagFilesState)
    state.selected = move_index(state.selected, 1, len(state.files)) or 0
    return ModeResult(consumed=True, status="search_select")


def open_tag_file(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    state = require_state(context, TagFilesState)
    if not state.files:
        return _to_normal()
    hit = state.files[state.selected]
    if hit.identity is not None:
        require_session(context).open_document(hit.identity)
    return _to_normal(status="navigate")


def cancel_tag_files(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del context, match
    return _to_normal()


__all__ = [
    "cancel_search",
    "cancel_tag_files",
    "confirm_search",
    "open_tag_file",
    "search_backspace",
    "search_down",
    "search_up",
    "tag_files_down",
    "tag_files_up",
]
