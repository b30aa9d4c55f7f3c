"""Letter-driven cursor motions shared by Navigate and Select modes."""

from __future__ import annotations

from typing import Callable, Dict

from modedit.buffer import Document
from modedit.keymaps import KeymapMatch
from modedit.modes.base_mode import ModeContext, ModeResult

from .core import active_document, no_document, settle

Motion = Callable[[Document, int], None]

MOTIONS: Dict[str, Motion] = {
    "line_start": lambda document, height: document.goto_line_start(),
    "line_end": lambda document, height: document.goto_line_end(),
    "word_forward": lambda document, height: document.skip_word_forward(),
    "word_backward": lambda document, height: document.skip_word_backward(),
    "char_left": lambda document, height: document.move_cursor_left(),
    "char_right": lambda document, height: document.move_cursor_right(),
    "line_up": lambda document, height: document.move_cursor_up(),
    "line_down": lambda document, height: document.move_cursor_down(),
    "page_up": lambda document, height: document.move_cursor_page_up(height),
    "page_down": lambda document, height: document.move_cursor_page_down(height),
}


def move(
    context: ModeContext,
    match: KeymapMatch,
    *,
    motion: str,
    extend: bool = False,
) -> ModeResult:
    """Apply ``motion`` to the active document.

    With ``extend`` the selection is stretched to the new cursor position, so
    the first extending motion anchors the selection where it lands.
    """

    del match
    document = active_document(context)
    if document is None:
        return no_document(motion)
    MOTIONS[motion](document, context.registry.viewport_height)
    if extend:
        document.extend_selection_to_cursor()
    settle(context, document)
    return ModeResult(
        consumed=True,
        status="select" if extend else "move",
        message=motion,
    )


def clear_selection(context: ModeContext, match: KeymapMatch) -> ModeResult:
    del match
    document = active_document(context)
    if document is None:
        return no_document("clear_selection")
    document.clear_selection()
    return ModeResult(consumed=True, status="select", message="clear_selection")


__all__ = ["MOTIONS", "move", "clear_selection"]
