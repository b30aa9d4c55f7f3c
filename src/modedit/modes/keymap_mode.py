"""Base for modes whose keys are looked up in a per-mode keymap."""

from __future__ import annotations

from modedit.keymaps import KeymapMatch
from modedit.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult
from .keymap_helpers import key_to_token, keymap_flags, require_keymaps


class KeymapMode(Mode):
    """Runs the bound action for a key; unbound keys go to ``handle_unbound``."""

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self._keymaps = require_keymaps(context)

    def handle_key(self, key: KeyInput) -> ModeResult:
        match = self._keymaps.lookup(
            self.name.value, key_to_token(key), keymap_flags(self.context)
        )
        if match is None:
            return self.handle_unbound(key)
        return self.run(match)

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        del key
        return ModeResult(consumed=False, status="miss", message="unhandled")

    def run(self, match: KeymapMatch) -> ModeResult:
        with telemetry.span(
            f"action::{match.action.id}",
            component="actions",
            metadata={"mode": self.name.value, "key": match.binding.key},
        ):
            outcome = match.action(self.context, match)
        if isinstance(outcome, ModeResult):
            return outcome
        return ModeResult(consumed=True)


__all__ = ["KeymapMode"]
