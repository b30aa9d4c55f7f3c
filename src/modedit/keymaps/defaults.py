"""Built-in actions and the default key tables for every mode."""

from __future__ import annotations

from functools import partial
from typing import Optional

from modedit.actions import buffers, core, editing, motion
from modedit.modes.popup import POPUP_FLAG
from modedit.runtime.settings import EditorSettings

from .models import ActionRef, Binding
from .registry import KeymapRegistry

WHEN_POPUP = POPUP_FLAG
WHEN_NO_POPUP = f"!{POPUP_FLAG}"

# Navigate and Select share these letters; Select also extends the selection.
MOTION_KEYS: tuple[tuple[str, str, str], ...] = (
    ("s", "line_start", "Go to line start"),
    ("l", "line_end", "Go to line end"),
    ("k", "word_forward", "Skip word forward"),
    ("d", "word_backward", "Skip word backward"),
    ("f", "char_left", "Move left"),
    ("j", "char_right", "Move right"),
    ("v", "line_up", "Move up"),
    ("b", "line_down", "Move down"),
    ("c", "page_up", "Page up"),
    ("n", "page_down", "Page down"),
)

MODE_SWITCH_ACTIONS = {
    "insert": "core.enter_insert",
    "navigate": "core.enter_navigate",
    "select": "core.enter_select",
    "normal": "core.enter_normal",
}

ACTIONS: tuple[tuple[str, object, str], ...] = (
    ("core.enter_insert", core.enter_insert_mode, "Enter insert mode"),
    ("core.enter_navigate", core.enter_navigate_mode, "Enter navigate mode"),
    ("core.enter_select", core.enter_select_mode, "Enter select mode"),
    ("core.enter_normal", core.enter_normal_mode, "Return to normal mode"),
    ("core.quit", core.quit_editor, "Exit the editor"),
    ("edit.backspace", editing.delete_backward, "Delete before the cursor"),
    ("edit.newline", editing.insert_newline, "Split the line at the cursor"),
    ("edit.left", editing.cursor_left, "Move left"),
    ("edit.right", editing.cursor_right, "Move right"),
    ("edit.up", editing.cursor_up, "Move up"),
    ("edit.down", editing.cursor_down, "Move down"),
    ("select.clear", motion.clear_selection, "Clear the selection"),
    ("buffer.new", buffers.new_buffer, "Open an empty buffer"),
    ("buffer.close", buffers.close_buffer, "Close the active buffer"),
    ("buffer.rename", buffers.open_rename_popup, "Rename the active buffer"),
    ("buffer.write", buffers.write_buffer, "Write the active buffer"),
    ("buffer.open", buffers.open_file_popup, "Open a file"),
    ("buffer.previous", buffers.rotate_previous, "Previous buffer"),
    ("buffer.next", buffers.rotate_next, "Next buffer"),
    ("popup.commit", buffers.popup_commit, "Apply the popup field"),
    ("popup.backspace", buffers.popup_backspace, "Delete the last character"),
    ("popup.next", buffers.popup_next_suggestion, "Next suggestion"),
    ("popup.previous", buffers.popup_previous_suggestion, "Previous suggestion"),
    ("popup.complete", buffers.popup_complete, "Complete to the suggestion"),
)

# (mode, key, action id, when)
KEYS: tuple[tuple[str, str, str, Optional[str]], ...] = (
    ("global", "ESC", "core.quit", None),
    ("normal", "n", "buffer.new", WHEN_NO_POPUP),
    ("normal", "c", "buffer.close", WHEN_NO_POPUP),
    ("normal", "a", "buffer.rename", WHEN_NO_POPUP),
    ("normal", "w", "buffer.write", WHEN_NO_POPUP),
    ("normal", "o", "buffer.open", WHEN_NO_POPUP),
    ("normal", "LEFT", "buffer.previous", WHEN_NO_POPUP),
    ("normal", "RIGHT", "buffer.next", WHEN_NO_POPUP),
    ("normal", "ENTER", "popup.commit", WHEN_POPUP),
    ("normal", "BACKSPACE", "popup.backspace", WHEN_POPUP),
    ("normal", "UP", "popup.previous", WHEN_POPUP),
    ("normal", "DOWN", "popup.next", WHEN_POPUP),
    ("normal", "TAB", "popup.complete", WHEN_POPUP),
    ("insert", "BACKSPACE", "edit.backspace", None),
    ("insert", "ENTER", "edit.newline", None),
    ("insert", "LEFT", "edit.left", None),
    ("insert", "RIGHT", "edit.right", None),
    ("insert", "UP", "edit.up", None),
    ("insert", "DOWN", "edit.down", None),
    ("insert", "ctrl+LEFT", "buffer.previous", None),
    ("insert", "ctrl+RIGHT", "buffer.next", None),
    ("navigate", "ctrl+LEFT", "buffer.previous", None),
    ("navigate", "ctrl+RIGHT", "buffer.next", None),
    ("select", "q", "select.clear", None),
)


def default_actions() -> tuple[ActionRef, ...]:
    refs = [ActionRef(action_id, handler, text) for action_id, handler, text in ACTIONS]
    for _, name, text in MOTION_KEYS:
        refs.append(ActionRef(f"navigate.{name}", partial(motion.move, motion=name), text))
        refs.append(
            ActionRef(
                f"select.{name}",
                partial(motion.move, motion=name, extend=True),
                f"{text} and extend the selection",
            )
        )
    return tuple(refs)


def default_bindings(settings: EditorSettings | None = None) -> tuple[Binding, ...]:
    """Every default binding; the ctrl mode-switch letters come from ``settings``."""

    settings = settings or EditorSettings()
    bindings = [
        Binding("global", f"ctrl+{settings.mode_keys[mode]}", action_id)
        for mode, action_id in MODE_SWITCH_ACTIONS.items()
    ]
    bindings.extend(Binding(mode, key, action_id, when) for mode, key, action_id, when in KEYS)
    for letter, name, _ in MOTION_KEYS:
        bindings.append(Binding("navigate", letter, f"navigate.{name}"))
        bindings.append(Binding("select", letter, f"select.{name}"))
    return tuple(bindings)


def load_default_keymaps(
    registry: KeymapRegistry, *, settings: EditorSettings | None = None
) -> KeymapRegistry:
    for action in default_actions():
        registry.register_action(action)
    for binding in default_bindings(settings):
        registry.bind(binding)
    return registry


__all__ = [
    "MOTION_KEYS",
    "MODE_SWITCH_ACTIONS",
    "default_actions",
    "default_bindings",
    "load_default_keymaps",
]
