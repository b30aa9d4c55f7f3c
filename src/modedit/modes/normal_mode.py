"""Normal mode: registry-level commands plus the popup sub-state."""

from __future__ import annotations

from .base_mode import EditorMode, KeyInput, ModeContext, ModeResult
from .keymap_mode import KeymapMode
from .popup import PopupState, close_popup, popup_state


class NormalMode(KeymapMode):
    name = EditorMode.NORMAL

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        close_popup(context)

    @property
    def popup(self) -> PopupState:
        return popup_state(self.context)

    def on_exit(self, next_mode: str | None) -> None:
        super().on_exit(next_mode)
        close_popup(self.context)

    def reset(self) -> None:
        close_popup(self.context)

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        popup = self.popup
        if not popup.is_open:
            return ModeResult(consumed=False, status="miss", message="unhandled")
        if key.text and key.text.isprintable() and not key.ctrl:
            popup.insert_text(key.text)
            return ModeResult(consumed=True, status="popup_edit")
        return ModeResult(consumed=False, status="miss", message="unhandled")


__all__ = ["NormalMode"]
