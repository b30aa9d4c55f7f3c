"""Textual adapter that wires ModeManager events into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from modedit.buffer import DocumentMirror, RegistryMirror
from modedit.modes import KeyInput, ModeResult
from modedit.modes.mode_manager import EditorSnapshot, ModeManager

# Textual key names -> engine key names.
NAMED_KEYS: Dict[str, str] = {
    "escape": "ESC",
    "enter": "ENTER",
    "return": "ENTER",
    "backspace": "BACKSPACE",
    "tab": "TAB",
    "left": "LEFT",
    "right": "RIGHT",
    "up": "UP",
    "down": "DOWN",
    "pageup": "PAGEUP",
    "pagedown": "PAGEDOWN",
    "home": "HOME",
    "end": "END",
    "delete": "DELETE",
}

BUS_EVENTS: Tuple[str, ...] = (
    "mode.switch",
    "buffer.new",
    "buffer.close",
    "buffer.rotate",
    "buffer.rename",
    "buffer.write",
    "buffer.open",
    "popup.open",
    "popup.close",
    "editor.error",
    "editor.quit",
)

VISIBLE_TABS = 4


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


def translate_key(key: str, character: Optional[str] = None) -> Optional[KeyInput]:
    """Turn a Textual ``Key`` event's ``key``/``character`` into a KeyInput.

    ``"ctrl+e"`` becomes key ``"e"`` with a ``ctrl`` modifier. Printable
    characters without ctrl carry ``text`` so Insert mode and popups can use
    them verbatim.
    """

    if not key:
        return None
    *modifier_parts, base = key.split("+") if key != "+" else ["+"]
    modifiers = tuple(part for part in modifier_parts if part)
    ctrl = "ctrl" in modifiers

    if base in NAMED_KEYS:
        return KeyInput(key=NAMED_KEYS[base], modifiers=modifiers)
    if base == "space":
        base = " "
    if not ctrl and character and len(character) == 1 and character.isprintable():
        return KeyInput(key=character, text=character)
    if len(base) == 1:
        return KeyInput(
            key=base,
            modifiers=modifiers,
            text=None if ctrl else base,
        )
    return KeyInput(key=base.upper(), modifiers=modifiers)


def buffer_tabs(
    documents: Tuple[DocumentMirror, ...],
    current: Optional[int],
    *,
    limit: int = VISIBLE_TABS,
) -> Tuple[List[Tuple[str, bool]], bool]:
    """Up to ``limit`` tab labels starting at the active document.

    When fewer than ``limit`` documents follow the active one the window is
    pulled back so ``limit`` tabs stay visible. Returns the ``(label, active)``
    pairs and whether documents were left out.
    """

    if not documents or current is None:
        return [], False
    first = 0
    if len(documents) > limit:
        first = min(current, len(documents) - limit)
    tabs = []
    for index, document in enumerate(documents[first : first + limit], start=first):
        marker = "● " if document.modified else ""
        tabs.append((f"{marker}{document.display_name}", index == current))
    return tabs, len(documents) > limit


def visible_lines(document: DocumentMirror, height: int) -> Tuple[str, ...]:
    start = document.scroll_offset
    return document.lines[start : start + max(1, height)]


def status_line(snapshot: EditorSnapshot) -> str:
    document = snapshot.active
    if document is None:
        return f"{snapshot.mode_label} | no document"
    line, column = document.cursor
    marker = " [+]" if document.modified else ""
    return (
        f"{snapshot.mode_label} | {document.display_name}{marker}"
        f" | {line + 1}:{column + 1}"
    )


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_view: Callable[[EditorSnapshot], None]
    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    request_exit: Callable[[], None] = _noop
    log: Callable[[str], None] = _noop


class TextualEditorAdapter:
    """Bridges ModeManager + bus events to a Textual-friendly surface."""

    def __init__(self, manager: ModeManager, hooks: TextualUIHooks) -> None:
        self.manager = manager
        self.hooks = hooks
        self._subscribe_events()
        self._refresh_view()

    def handle_textual_key(
        self, key: str, *, character: Optional[str] = None
    ) -> Optional[ModeResult]:
        """Translate a Textual key event into a KeyInput and dispatch it."""

        key_input = translate_key(key, character)
        if key_input is None:
            return None
        self._log_state("key ->", key=key_input.key, mods=key_input.modifiers)
        result = self.manager.handle_key(key_input)
        self._after_mode_result(result)
        self._log_state(
            "result <-",
            consumed=result.consumed,
            status=result.status,
            message=result.message,
            switch_to=result.switch_to,
        )
        return result

    # Renderer side

    def pull_registry(self) -> RegistryMirror:
        return self.manager.context.registry.mirror()

    def push_viewport(self, width: int, height: int) -> None:
        self.manager.set_viewport_size(width, height)
        self._refresh_view()

    def _after_mode_result(self, result: ModeResult) -> None:
        if result.status in {"error", "no_document"} and result.message:
            self.hooks.update_status(f"{result.status}: {result.message}")
        self._refresh_view()
        if self.manager.exit_requested:
            self.hooks.request_exit()

    def _subscribe_events(self) -> None:
        bus = self.manager.context.bus
        for event in BUS_EVENTS:
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)
        if name == "editor.error":
            self.hooks.update_status(f"error: {payload}")
        elif name == "buffer.write" and isinstance(payload, dict):
            self.hooks.update_status(f"wrote {payload.get('bytes')} bytes")

    def _refresh_view(self) -> None:
        self.hooks.update_view(self.manager.snapshot())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        active_mode = self.manager.active_name
        document = self.manager.context.registry.active
        metadata: Dict[str, object] = {
            "mode": active_mode.value if active_mode else "?",
            "documents": len(self.manager.context.registry),
        }
        if document is not None:
            metadata["document"] = document.name
            metadata["cursor"] = document.cursor
            metadata["selection"] = document.selection()
        return metadata


__all__ = [
    "TextualEditorAdapter",
    "TextualUIHooks",
    "translate_key",
    "buffer_tabs",
    "visible_lines",
    "status_line",
]
