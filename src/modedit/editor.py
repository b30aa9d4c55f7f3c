"""Factory wiring a ModeManager with the standard mode set."""

from __future__ import annotations

from pathlib import Path

from modedit.buffer import DocumentRegistry
from modedit.modes import (
    EditorMode,
    InsertMode,
    ModeBus,
    ModeContext,
    NavigateMode,
    NormalMode,
    SelectMode,
)
from modedit.modes.mode_manager import ModeManager
from modedit.runtime import EditorSettings, telemetry


def create_default_manager(
    initial_path: str | Path | None = None,
    *,
    settings: EditorSettings | None = None,
    viewport_size: tuple[int, int] = (80, 24),
) -> ModeManager:
    """Build a ModeManager with every mode registered on the default keymaps.

    With ``initial_path`` the file is opened into the first document and the
    editor starts in Insert mode; otherwise the registry starts empty in Normal.
    ``DocumentIOError`` from the initial open propagates to the caller.
    """

    settings = settings or EditorSettings.from_env()
    registry = DocumentRegistry(
        viewport_size=viewport_size,
        trailing_newline=settings.trailing_newline,
    )
    context = ModeContext(registry=registry, bus=ModeBus(), settings=settings)
    manager = ModeManager(context)
    manager.register_mode(NormalMode)
    manager.register_mode(InsertMode)
    manager.register_mode(NavigateMode)
    manager.register_mode(SelectMode)

    if initial_path is not None:
        registry.open_file(initial_path)
        manager.switch_mode(EditorMode.INSERT.value)

    telemetry.record_event(
        "editor.start",
        data={"path": str(initial_path) if initial_path else None},
    )
    return manager


__all__ = ["create_default_manager"]
