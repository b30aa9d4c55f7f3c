"""Insert-mode editing verbs: backspace, newline and arrow movement."""

from __future__ import annotations

from typing import Callable

from modedit.buffer import Document
from modedit.keymaps import KeymapMatch
from modedit.modes.base_mode import ModeContext, ModeResult

from .core import active_document, no_document, settle


def _apply(
    context: ModeContext,
    operation: Callable[[Document], None],
    *,
    status: str,
) -> ModeResult:
    document = active_document(context)
    if document is None:
        return no_document(status)
    operation(document)
    settle(context, document)
    return ModeResult(consumed=True, status=status)


def delete_backward(context: ModeContext, match: KeymapMatch) -> ModeResult:
    del match
    return _apply(context, Document.remove_character, status="insert")


def insert_newline(context: ModeContext, match: KeymapMatch) -> ModeResult:
    del match
    return _apply(context, Document.new_line, status="insert")


def cursor_left(context: ModeContext, match: KeymapMatch) -> ModeResult:
    del match
    return _apply(context, Document.move_cursor_left, status="move")


def cursor_right(context: ModeContext, match: KeymapMatch) -> ModeResult:
    del match
    return _apply(context, Document.move_cursor_right, status="move")


def cursor_up(context: ModeContext, match: KeymapMatch) -> ModeResult:
    del match
    return _apply(context, Document.move_cursor_up, status="move")


def cursor_down(context: ModeContext, match: KeymapMatch) -> ModeResult:
    del match
    return _apply(context, Document.move_cursor_down, status="move")


__all__ = [
    "delete_backward",
    "insert_newline",
    "cursor_left",
    "cursor_right",
    "cursor_up",
    "cursor_down",
]
