"""Core action implementations shared across modes."""

from __future__ import annotations

from typing import Optional

from modedit.buffer import Document
from modedit.keymaps import KeymapMatch
from modedit.modes.base_mode import EditorMode, ModeContext, ModeResult


def active_document(context: ModeContext) -> Optional[Document]:
    return context.registry.active


def no_document(message: str) -> ModeResult:
    return ModeResult(consumed=True, status="no_document", message=message)


def settle(context: ModeContext, document: Document) -> None:
    """Keep the cursor line inside the viewport after a Document action."""

    document.update_scroll_position(context.registry.viewport_height)


def _enter_document_mode(context: ModeContext, mode: EditorMode) -> ModeResult:
    if context.registry.is_empty:
        return no_document(f"enter_{mode.value}")
    return ModeResult(consumed=True, switch_to=mode.value, message=f"enter_{mode.value}")


def enter_insert_mode(context: ModeContext, match: KeymapMatch) -> ModeResult:
    del match
    return _enter_document_mode(context, EditorMode.INSERT)


def enter_navigate_mode(context: ModeContext, match: KeymapMatch) -> ModeResult:
    del match
    return _enter_document_mode(context, EditorMode.NAVIGATE)


def enter_select_mode(context: ModeContext, match: KeymapMatch) -> ModeResult:
    del match
    return _enter_document_mode(context, EditorMode.SELECT)


def enter_normal_mode(context: ModeContext, match: KeymapMatch) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, switch_to=EditorMode.NORMAL.value, message="enter_normal")


def quit_editor(context: ModeContext, match: KeymapMatch) -> ModeResult:
    del match
    context.bus.emit("editor.quit")
    return ModeResult(consumed=True, status="quit", message="quit")


__all__ = [
    "active_document",
    "no_document",
    "settle",
    "enter_insert_mode",
    "enter_navigate_mode",
    "enter_select_mode",
    "enter_normal_mode",
    "quit_editor",
]
