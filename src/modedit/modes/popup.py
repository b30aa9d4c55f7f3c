"""Popup sub-state owned by Normal mode (rename buffer, open file)."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional

from modedit.search import collect_files, fuzzy_match

from .base_mode import ModeContext
from .keymap_helpers import update_flag

POPUP_FLAG = "popup_open"
STATE_KEY = "popup_state"


class Popup(str, Enum):
    NONE = "none"
    RENAME_BUFFER = "rename_buffer"
    OPEN_FILE = "open_file"


@dataclass(slots=True)
class PopupState:
    """Transient text field plus, for OPEN_FILE, live filename suggestions."""

    kind: Popup = Popup.NONE
    text: str = ""
    suggestions: List[str] = field(default_factory=list)
    selected: int = 0
    error: Optional[str] = None
    root: Path = field(default_factory=Path.cwd)
    candidates: List[str] = field(default_factory=list)
    limit: int = 10

    @property
    def is_open(self) -> bool:
        return self.kind is not Popup.NONE

    @property
    def highlighted(self) -> Optional[str]:
        if not self.suggestions:
            return None
        return self.suggestions[self.selected]

    def insert_text(self, text: str) -> None:
        self.text += text
        self.error = None
        self.refresh()

    def backspace(self) -> None:
        self.text = self.text[:-1]
        self.error = None
        self.refresh()

    def move_selection(self, delta: int) -> None:
        if self.suggestions:
            self.selected = (self.selected + delta) % len(self.suggestions)

    def complete(self) -> None:
        choice = self.highlighted
        if choice is not None:
            self.text = choice
            self.refresh()

    def refresh(self) -> None:
        if self.kind is not Popup.OPEN_FILE:
            self.suggestions = []
            self.selected = 0
            return
        self.suggestions = fuzzy_match(self.text, self.candidates, limit=self.limit)
        self.selected = 0

    def resolve_choice(self) -> str:
        """Path to open: the highlighted suggestion, else the typed query."""

        choice = self.highlighted or self.text.strip()
        if Path(choice).is_absolute() or self.root == Path.cwd():
            return choice
        return str(self.root / choice)


def popup_state(context: ModeContext) -> PopupState:
    state = context.extras.get(STATE_KEY)
    if not isinstance(state, PopupState):
        state = PopupState()
        context.extras[STATE_KEY] = state
    return state


def open_popup(context: ModeContext, kind: Popup, *, text: str = "") -> PopupState:
    settings = context.settings
    root = Path.cwd()
    candidates: List[str] = []
    if kind is Popup.OPEN_FILE:
        candidates = collect_files(
            root,
            show_hidden=settings.show_hidden_files,
            limit=settings.file_scan_limit,
        )
    state = PopupState(
        kind=kind,
        text=text,
        root=root,
        candidates=candidates,
        limit=settings.suggestion_limit,
    )
    state.refresh()
    context.extras[STATE_KEY] = state
    update_flag(context, POPUP_FLAG, True)
    context.bus.emit("popup.open", kind.value)
    return state


def close_popup(context: ModeContext) -> None:
    state = popup_state(context)
    was_open = state.is_open
    context.extras[STATE_KEY] = PopupState()
    update_flag(context, POPUP_FLAG, False)
    if was_open:
        context.bus.emit("popup.close", state.kind.value)


__all__ = [
    "Popup",
    "PopupState",
    "POPUP_FLAG",
    "popup_state",
    "open_popup",
    "close_popup",
]
