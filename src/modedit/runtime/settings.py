"""Editor settings resolved from ``MODEDIT_*`` environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from .telemetry import ENV_PREFIX

DEFAULT_MODE_KEYS: Mapping[str, str] = {
    "insert": "e",
    "navigate": "a",
    "select": "s",
    "normal": "n",
}


def _env(
    name: str, default: Optional[str] = None, *, environ: Mapping[str, str]
) -> Optional[str]:
    return environ.get(f"{ENV_PREFIX}{name}", default)


def _env_flag(name: str, default: bool, *, environ: Mapping[str, str]) -> bool:
    raw = _env(name, environ=environ)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, fallback: int, *, environ: Mapping[str, str]) -> int:
    value = _env(name, environ=environ)
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


@dataclass(slots=True)
class EditorSettings:
    """Tunables shared by keymaps, file I/O and the open-file popup."""

    mode_keys: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_MODE_KEYS))
    trailing_newline: bool = True
    suggestion_limit: int = 10
    show_hidden_files: bool = False
    file_scan_limit: int = 5000

    def __post_init__(self) -> None:
        missing = set(DEFAULT_MODE_KEYS) - set(self.mode_keys)
        if missing:
            raise ValueError(f"mode_keys missing entries for {sorted(missing)}")
        letters = [key.lower() for key in self.mode_keys.values()]
        if any(len(letter) != 1 for letter in letters):
            raise ValueError("mode switch keys must be single characters")
        if len(set(letters)) != len(letters):
            raise ValueError("mode switch keys must be distinct")
        self.mode_keys = {mode: key.lower() for mode, key in self.mode_keys.items()}
        if self.suggestion_limit < 1:
            raise ValueError("suggestion_limit must be positive")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EditorSettings":
        env = os.environ if environ is None else environ
        mode_keys = {
            mode: _env(f"KEY_{mode.upper()}", default, environ=env) or default
            for mode, default in DEFAULT_MODE_KEYS.items()
        }
        return cls(
            mode_keys=mode_keys,
            trailing_newline=_env_flag("TRAILING_NEWLINE", True, environ=env),
            suggestion_limit=_env_int("SUGGESTIONS", 10, environ=env),
            show_hidden_files=_env_flag("SHOW_HIDDEN", False, environ=env),
            file_scan_limit=_env_int("FILE_SCAN_LIMIT", 5000, environ=env),
        )


__all__ = ["EditorSettings", "DEFAULT_MODE_KEYS"]
