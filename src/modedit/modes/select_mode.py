"""Select mode: navigate-style movement that drags the selection along."""

from __future__ import annotations

from .base_mode import EditorMode
from .keymap_mode import KeymapMode


class SelectMode(KeymapMode):
    name = EditorMode.SELECT


__all__ = ["SelectMode"]
