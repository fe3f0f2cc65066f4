"""Editor modes, per-mode state, and the transition table."""

from .base_mode import (
    KeyInput,
    Mode,
    ModeBus,
    ModeContext,
    ModeResult,
    require_session,
    require_state,
)
from .states import (
    BlockInsertState,
    CommandState,
    CompletionState,
    FileTreeState,
    FileTreeVisualState,
    InsertState,
    ModeState,
    NormalState,
    SearchState,
    TagFilesState,
    VisualState,
)
from .transitions import ALLOWED_TRANSITIONS, InvalidTransitionError, is_allowed
from .keymap_mode import KeymapMode, SequenceMode
from .normal_mode import NormalMode
from .insert_mode import InsertMode
from .complete_mode import CompleteMode
from .command_mode import CommandMode
from .search_mode import SearchMode, TagFilesMode
from .visual_mode import VisualBlockMode, VisualMode
from .block_insert_mode import BlockInsertMode
from .file_tree_mode import FileTreeMode, FileTreeVisualMode

DEFAULT_MODES = (
    NormalMode,
    InsertMode,
    CompleteMode,
    CommandMode,
    SearchMode,
    TagFilesMode,
    VisualMode,
    VisualBlockMode,
    BlockInsertMode,
    FileTreeMode,
    FileTreeVisualMode,
)

__all__ = [
    "ALLOWED_TRANSITIONS",
    "BlockInsertMode",
    "BlockInsertState",
    "CommandMode",
    "CommandState",
    "CompleteMode",
    "CompletionState",
    "DEFAULT_MODES",
    "FileTreeMode",
    "FileTreeState",
    "FileTreeVisualMode",
    "FileTreeVisualState",
    "InsertMode",
    "InsertState",
    "InvalidTransitionError",
    "KeyInput",
    "KeymapMode",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "ModeState",
    "NormalMode",
    "NormalState",
    "SearchMode",
    "SearchState",
    "SequenceMode",
    "TagFilesMode",
    "TagFilesState",
    "VisualBlockMode",
    "VisualMode",
    "VisualState",
    "is_allowed",
    "require_session",
    "require_state",
]
