"""Modes, the Normal-mode popup sub-state, and key dispatch."""

from .base_mode import (
    EditorMode,
    KeyInput,
    Mode,
    ModeBus,
    ModeContext,
    ModeDispatchError,
    ModeResult,
)
from .keymap_mode import KeymapMode
from .normal_mode import NormalMode
from .insert_mode import InsertMode
from .navigate_mode import NavigateMode
from .select_mode import SelectMode
from .popup import Popup, PopupState

__all__ = [
    "EditorMode",
    "KeyInput",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeDispatchError",
    "ModeResult",
    "KeymapMode",
    "NormalMode",
    "InsertMode",
    "NavigateMode",
    "SelectMode",
    "Popup",
    "PopupState",
]
