"""Editing verbs invoked by keymap bindings."""

from .core import (
    enter_insert_mode,
    enter_navigate_mode,
    enter_normal_mode,
    enter_select_mode,
    quit_editor,
)
from .editing import (
    cursor_down,
    cursor_left,
    cursor_right,
    cursor_up,
    delete_backward,
    insert_newline,
)
from .motion import MOTIONS, clear_selection, move
from .buffers import (
    close_buffer,
    new_buffer,
    open_file_popup,
    open_rename_popup,
    popup_backspace,
    popup_commit,
    popup_complete,
    popup_next_suggestion,
    popup_previous_suggestion,
    rotate_next,
    rotate_previous,
    write_buffer,
)

__all__ = [
    "enter_insert_mode",
    "enter_navigate_mode",
    "enter_select_mode",
    "enter_normal_mode",
    "quit_editor",
    "delete_backward",
    "insert_newline",
    "cursor_left",
    "cursor_right",
    "cursor_up",
    "cursor_down",
    "MOTIONS",
    "move",
    "clear_selection",
    "rotate_previous",
    "rotate_next",
    "new_buffer",
    "close_buffer",
    "write_buffer",
    "open_rename_popup",
    "open_file_popup",
    "popup_commit",
    "popup_backspace",
    "popup_next_suggestion",
    "popup_previous_suggestion",
    "popup_complete",
]
