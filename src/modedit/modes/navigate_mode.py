"""Navigate mode: cursor movement on a single-letter keymap."""

from __future__ import annotations

from .base_mode import EditorMode
from .keymap_mode import KeymapMode


class NavigateMode(KeymapMode):
    name = EditorMode.NAVIGATE


__all__ = ["NavigateMode"]
