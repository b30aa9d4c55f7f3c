"""Modal terminal text editor core."""

__all__ = [
    "adapters",
    "actions",
    "buffer",
    "editor",
    "keymaps",
    "modes",
    "runtime",
    "search",
]

__version__ = "0.1.0"
