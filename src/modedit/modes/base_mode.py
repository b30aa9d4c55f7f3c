"""Base classes and shared utilities for editor modes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Optional, Tuple

from modedit.buffer import Document, DocumentRegistry
from modedit.runtime.settings import EditorSettings

GLOBAL_KEYMAP = "global"


class EditorMode(str, Enum):
    """The closed set of input-interpretation states."""

    NORMAL = "normal"
    INSERT = "insert"
    NAVIGATE = "navigate"
    SELECT = "select"

    @property
    def label(self) -> str:
        return MODE_LABELS[self]


MODE_LABELS = {
    EditorMode.NORMAL: "NORMAL",
    EditorMode.INSERT: "INSERT",
    EditorMode.NAVIGATE: "NAV",
    EditorMode.SELECT: "SELECT",
}


class ModeDispatchError(RuntimeError):
    """Raised when a key reaches a mode that is not registered."""


@dataclass(slots=True)
class KeyInput:
    """Normalized key event passed to modes."""

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None

    @property
    def ctrl(self) -> bool:
        return any(mod.lower() == "ctrl" for mod in self.modifiers)


@dataclass(slots=True)
class ModeResult:
    """Result returned from ``Mode.handle_key``."""

    consumed: bool
    switch_to: Optional[str] = None
    status: str = "ok"
    message: Optional[str] = None


@dataclass(slots=True)
class ModeContext:
    """Shared services every mode can access.

    The registry is passed explicitly into every handler; modes never keep
    their own reference to a document.
    """

    registry: DocumentRegistry
    bus: "ModeBus"
    settings: EditorSettings = field(default_factory=EditorSettings)
    extras: Dict[str, object] = field(default_factory=dict)

    @property
    def document(self) -> Optional[Document]:
        return self.registry.active


class ModeBus:
    """Minimal event bus letting modes exchange structured signals."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


class Mode:
    """Base class all concrete editor modes inherit from."""

    name: EditorMode

    def __init__(self, context: ModeContext) -> None:
        self.context = context

    def on_enter(self, previous: Optional[str]) -> None:
        del previous

    def on_exit(self, next_mode: Optional[str]) -> None:
        del next_mode

    def reset(self) -> None:
        """Called when the active mode is selected again."""

    def handle_key(self, key: KeyInput) -> ModeResult:  # pragma: no cover - abstract
        raise NotImplementedError
