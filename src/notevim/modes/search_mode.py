"""Result lists: search over backlinks, tags or files, and files for one tag."""

from __future__ import annotations

from .base_mode import KeyInput, ModeResult, require_session
from .keymap_mode import KeymapMode
from .states import SearchState, TagFilesState


class SearchMode(KeymapMode):
    """Typed characters extend the query and re-run the search."""

    name = "search"
    state_type = SearchState
    label = "Search"

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        char = key.char
        if char is None:
            return ModeResult(consumed=False, status="miss")
        state = self.state
        state.query += char
        require_session(self.context).run_search(state)
        return ModeResult(consumed=True, status="search_query")


class TagFilesMode(KeymapMode):
    name = "tag_files"
    state_type = TagFilesState
    label = "Tag Files"


__all__ = ["SearchMode", "TagFilesMode"]
