"""Glue between ModeContext extras and the keymap registry."""

from __future__ import annotations

from typing import Mapping, MutableMapping, cast

from modedit.keymaps import KeymapRegistry, make_token

from .base_mode import KeyInput, ModeContext

KEYMAPS_KEY = "keymaps"
FLAGS_KEY = "keymap_flags"


def key_to_token(key: KeyInput) -> str:
    return make_token(key.key, key.modifiers)


def require_keymaps(context: ModeContext) -> KeymapRegistry:
    keymaps = context.extras.get(KEYMAPS_KEY)
    if not isinstance(keymaps, KeymapRegistry):
        raise RuntimeError(f"ModeContext.extras missing '{KEYMAPS_KEY}'")
    return keymaps


def keymap_flags(context: ModeContext) -> Mapping[str, bool]:
    return cast(Mapping[str, bool], context.extras.setdefault(FLAGS_KEY, {}))


def update_flag(context: ModeContext, key: str, value: bool) -> None:
    flags = cast(MutableMapping[str, bool], context.extras.setdefault(FLAGS_KEY, {}))
    flags[key] = value


__all__ = [
    "KEYMAPS_KEY",
    "key_to_token",
    "require_keymaps",
    "keymap_flags",
    "update_flag",
]
