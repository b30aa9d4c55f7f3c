"""Insert mode: literal text entry into the active document."""

from __future__ import annotations

from .base_mode import EditorMode, KeyInput, ModeResult
from .keymap_mode import KeymapMode


class InsertMode(KeymapMode):
    name = EditorMode.INSERT

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        if not key.text or key.ctrl:
            return ModeResult(consumed=False, status="miss", message="unhandled")
        document = self.context.document
        if document is None:
            return ModeResult(consumed=False, status="no_document")
        for char in key.text:
            document.add_character(char)
        document.update_scroll_position(self.context.registry.viewport_height)
        return ModeResult(consumed=True, status="insert")


__all__ = ["InsertMode"]
