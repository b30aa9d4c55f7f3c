"""Single-key keymaps for each editor mode.

Built-in bindings live in ``modedit.keymaps.defaults``.
"""

from .models import ActionRef, Binding, KeymapMatch, make_token, parse_token
from .registry import KeymapConflictError, KeymapRegistry

__all__ = [
    "ActionRef",
    "Binding",
    "KeymapMatch",
    "KeymapConflictError",
    "KeymapRegistry",
    "make_token",
    "parse_token",
]
