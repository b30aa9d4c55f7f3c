"""Registry-level commands and the Normal-mode popup actions."""

from __future__ import annotations

from modedit.buffer import DocumentIOError
from modedit.keymaps import KeymapMatch
from modedit.modes.base_mode import ModeContext, ModeResult
from modedit.modes.popup import Popup, close_popup, open_popup, popup_state
from modedit.runtime import telemetry

from .core import no_document, settle


def _report_error(context: ModeContext, exc: DocumentIOError) -> ModeResult:
    message = str(exc)
    telemetry.get_logger("modedit.actions.buffers").error(message)
    context.bus.emit("editor.error", message)
    return ModeResult(consumed=True, status="error", message=message)


def _rotate(context: ModeContext, direction: int) -> ModeResult:
    registry = context.registry
    if registry.is_empty:
        return no_document("rotate")
    index = registry.rotate_buffer(direction)
    context.bus.emit("buffer.rotate", index)
    document = registry.active
    if document is not None:
        settle(context, document)
    return ModeResult(consumed=True, status="rotate")


def rotate_previous(context: ModeContext, match: KeymapMatch) -> ModeResult:
    del match
    return _rotate(context, -1)


def rotate_next(context: ModeContext, match: KeymapMatch) -> ModeResult:
    del match
    return _rotate(context, 1)


def new_buffer(context: ModeContext, match: KeymapMatch) -> ModeResult:
    del match
    document = context.registry.new_buffer()
    context.bus.emit("buffer.new", document.name)
    return ModeResult(consumed=True, status="buffer")


def close_buffer(context: ModeContext, match: KeymapMatch) -> ModeResult:
    del match
    if context.registry.is_empty:
        return no_document("close")
    document = context.registry.close_buffer()
    context.bus.emit("buffer.close", document.name)
    return ModeResult(consumed=True, status="buffer")


def write_buffer(context: ModeContext, match: KeymapMatch) -> ModeResult:
    del match
    registry = context.registry
    if registry.is_empty:
        return no_document("write")
    try:
        written = registry.write_buffer()
    except DocumentIOError as exc:
        return _report_error(context, exc)
    name = registry.active.name if registry.active else ""
    context.bus.emit("buffer.write", {"name": name, "bytes": written})
    return ModeResult(consumed=True, status="buffer", message=f"wrote {written} bytes")


def open_rename_popup(context: ModeContext, match: KeymapMatch) -> ModeResult:
    del match
    document = context.registry.active
    if document is None:
        return no_document("rename")
    open_popup(context, Popup.RENAME_BUFFER, text=document.name)
    return ModeResult(consumed=True, status="popup")


def open_file_popup(context: ModeContext, match: KeymapMatch) -> ModeResult:
    del match
    open_popup(context, Popup.OPEN_FILE)
    return ModeResult(consumed=True, status="popup")


def popup_commit(context: ModeContext, match: KeymapMatch) -> ModeResult:
    """Apply the popup field; an empty or failing value keeps the popup open."""

    del match
    popup = popup_state(context)
    value = popup.text.strip()
    if popup.kind is Popup.RENAME_BUFFER:
        if not value:
            popup.error = "Name cannot be empty"
            return ModeResult(consumed=True, status="popup", message=popup.error)
        if context.registry.is_empty:
            close_popup(context)
            return no_document("rename")
        document = context.registry.rename_buffer(value)
        close_popup(context)
        context.bus.emit("buffer.rename", document.name)
        return ModeResult(consumed=True, status="buffer")

    if popup.kind is Popup.OPEN_FILE:
        if not value and popup.highlighted is None:
            popup.error = "Path cannot be empty"
            return ModeResult(consumed=True, status="popup", message=popup.error)
        path = popup.resolve_choice()
        try:
            document = context.registry.open_file(path)
        except DocumentIOError as exc:
            popup.error = str(exc)
            return _report_error(context, exc)
        close_popup(context)
        settle(context, document)
        context.bus.emit("buffer.open", document.name)
        return ModeResult(consumed=True, status="buffer")

    return ModeResult(consumed=False, status="miss")


def popup_backspace(context: ModeContext, match: KeymapMatch) -> ModeResult:
    del match
    popup_state(context).backspace()
    return ModeResult(consumed=True, status="popup_edit")


def popup_next_suggestion(context: ModeContext, match: KeymapMatch) -> ModeResult:
    del match
    popup_state(context).move_selection(1)
    return ModeResult(consumed=True, status="popup_edit")


def popup_previous_suggestion(
    context: ModeContext, match: KeymapMatch
) -> ModeResult:
    del match
    popup_state(context).move_selection(-1)
    return ModeResult(consumed=True, status="popup_edit")


def popup_complete(context: ModeContext, match: KeymapMatch) -> ModeResult:
    del match
    popup_state(context).complete()
    return ModeResult(consumed=True, status="popup_edit")


__all__ = [
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
