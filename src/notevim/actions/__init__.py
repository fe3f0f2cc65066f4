"""Action handlers bound to keys by the default keymaps."""

# The keymap defaults import these submodules; they must load first.
import notevim.keymaps  # noqa: F401

from .command import cancel_command, erase_command_char, submit_command_line
from .completion import (
    accept_completion,
    cancel_completion,
    completion_backspace,
    completion_down,
    completion_up,
)
from .core import (
    append_after_cursor,
    enter_command_mode,
    enter_insert_mode,
    enter_visual_block_mode,
    enter_visual_mode,
    exit_to_normal_mode,
    noop_action,
    open_line_below,
)
from .visual import (
    block_insert_after,
    block_insert_before,
    block_insert_erase,
    delete_selection,
    extend_selection,
    leave_block_insert,
    yank_selection,
)

__all__ = [
    "accept_completion",
    "append_after_cursor",
    "block_insert_after",
    "block_insert_before",
    "block_insert_erase",
    "cancel_command",
    "cancel_completion",
    "completion_backspace",
    "completion_down",
    "completion_up",
    "delete_selection",
    "enter_command_mode",
    "enter_insert_mode",
    "enter_visual_block_mode",
    "enter_visual_mode",
    "erase_command_char",
    "exit_to_normal_mode",
    "extend_selection",
    "leave_block_insert",
    "noop_action",
    "open_line_below",
    "submit_command_line",
    "yank_selection",
]
