"""Mode manager: owns the active mode and dispatches one key at a time."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple, Type

from modedit.buffer import DocumentMirror
from modedit.keymaps import KeymapMatch, KeymapRegistry
from modedit.keymaps.defaults import load_default_keymaps
from modedit.runtime import telemetry

from .base_mode import (
    GLOBAL_KEYMAP,
    EditorMode,
    KeyInput,
    Mode,
    ModeContext,
    ModeDispatchError,
    ModeResult,
)
from .keymap_helpers import KEYMAPS_KEY, key_to_token, keymap_flags
from .popup import popup_state


@dataclass(frozen=True, slots=True)
class PopupView:
    kind: str
    text: str
    suggestions: Tuple[str, ...]
    selected: int
    error: Optional[str]


@dataclass(frozen=True, slots=True)
class EditorSnapshot:
    """Everything a renderer needs to draw one frame."""

    mode: str
    mode_label: str
    popup: Optional[PopupView]
    documents: Tuple[DocumentMirror, ...]
    current: Optional[int]
    viewport: Tuple[int, int]

    @property
    def active(self) -> Optional[DocumentMirror]:
        if self.current is None:
            return None
        return self.documents[self.current]


class ModeManager:
    """Owns the active mode, handles transitions, and dispatches key events.

    Every key is first resolved against the ``global`` keymap (mode switches
    and quit); anything it does not claim goes to the active mode.
    """

    def __init__(
        self, context: ModeContext, *, keymaps: KeymapRegistry | None = None
    ) -> None:
        self.context = context
        self._modes: Dict[EditorMode, Mode] = {}
        self._active: Optional[EditorMode] = None
        self.exit_requested = False
        if keymaps is None:
            keymaps = load_default_keymaps(
                KeymapRegistry(logger_name="modedit.keymaps"),
                settings=context.settings,
            )
        self.keymaps = keymaps
        context.extras[KEYMAPS_KEY] = keymaps

    @property
    def active_mode(self) -> Optional[Mode]:
        if self._active is None:
            return None
        return self._modes.get(self._active)

    @property
    def active_name(self) -> Optional[EditorMode]:
        return self._active

    def register_mode(
        self,
        mode_cls: Type[Mode],
        /,
        *mode_args: object,
        **mode_kwargs: object,
    ) -> Mode:
        mode = mode_cls(self.context, *mode_args, **mode_kwargs)
        if not isinstance(mode.name, EditorMode):
            raise ValueError(f"Mode {mode_cls.__name__} has no EditorMode name")
        if mode.name in self._modes:
            raise ValueError(f"Mode '{mode.name.value}' already registered")
        self._modes[mode.name] = mode
        if self._active is None:
            self._active = mode.name
            mode.on_enter(None)
        return mode

    def switch_mode(self, name: str) -> None:
        try:
            target = EditorMode(name)
        except ValueError as exc:
            raise KeyError(f"Unknown mode '{name}'") from exc
        if target not in self._modes:
            raise KeyError(f"Mode '{target.value}' is not registered")
        previous = self.active_mode
        if previous and previous.name is target:
            previous.reset()
            return
        if previous:
            previous.on_exit(target.value)
        self._active = target
        self._modes[target].on_enter(previous.name.value if previous else None)
        self.context.bus.emit("mode.switch", target.value)
        telemetry.record_event("mode.switch", data={"mode": target.value})

    def handle_key(self, key: KeyInput) -> ModeResult:
        if self._active is None:
            raise ModeDispatchError("No active mode registered")
        mode = self._modes.get(self._active)
        if mode is None:
            raise ModeDispatchError(f"Active mode '{self._active}' has no handler")

        with telemetry.span(
            name=f"mode::{mode.name.value}",
            component=True,
            metadata={"key": key_to_token(key), "mode": mode.name.value},
        ):
            result = self._dispatch_global(key)
            if result is None:
                result = mode.handle_key(key)
        return self._after_mode_result(result)

    def _dispatch_global(self, key: KeyInput) -> Optional[ModeResult]:
        match = self.keymaps.lookup(
            GLOBAL_KEYMAP, key_to_token(key), keymap_flags(self.context)
        )
        if match is None:
            return None
        return self._execute(match)

    def _execute(self, match: KeymapMatch) -> ModeResult:
        outcome = match.action(self.context, match)
        if isinstance(outcome, ModeResult):
            return outcome
        return ModeResult(consumed=True)

    def _after_mode_result(self, result: ModeResult) -> ModeResult:
        if result.status == "quit":
            self.exit_requested = True
        if result.switch_to:
            self.switch_mode(result.switch_to)
        return result

    def set_viewport_size(self, width: int, height: int) -> None:
        registry = self.context.registry
        registry.set_viewport_size(width, height)
        document = registry.active
        if document is not None:
            document.update_scroll_position(registry.viewport_height)

    def snapshot(self) -> EditorSnapshot:
        if self._active is None:
            raise ModeDispatchError("No active mode registered")
        popup = popup_state(self.context)
        popup_view = None
        if popup.is_open:
            popup_view = PopupView(
                kind=popup.kind.value,
                text=popup.text,
                suggestions=tuple(popup.suggestions),
                selected=popup.selected,
                error=popup.error,
            )
        mirror = self.context.registry.mirror()
        return EditorSnapshot(
            mode=self._active.value,
            mode_label=self._active.label,
            popup=popup_view,
            documents=mirror.documents,
            current=mirror.current,
            viewport=mirror.viewport,
        )


__all__ = ["ModeManager", "EditorSnapshot", "PopupView"]
