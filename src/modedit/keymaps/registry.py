"""Per-mode key tables and the actions they dispatch to."""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Mapping, Optional

from modedit.runtime.telemetry import span

from .models import ActionRef, Binding, KeymapMatch


class KeymapConflictError(RuntimeError):
    """Raised when a binding would fire on the same key as an existing one."""

    def __init__(self, binding: Binding, conflicts: Iterable[Binding]) -> None:
        self.binding = binding
        self.conflicts = tuple(conflicts)
        taken = ", ".join(existing.action_id for existing in self.conflicts)
        super().__init__(
            f"{binding.mode}:{binding.key} for '{binding.action_id}' is taken by {taken}"
        )


class KeymapRegistry:
    """Actions by id plus one ``token -> bindings`` table per mode.

    A token may carry several bindings as long as their ``when`` conditions
    never hold together, which is how Normal mode shares keys between its
    command table and the popup field.
    """

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._tables: Dict[str, Dict[str, List[Binding]]] = {}
        self._logger_name = logger_name

    def __contains__(self, action_id: object) -> bool:
        return action_id in self._actions

    def register_action(self, action: ActionRef) -> ActionRef:
        if action.id in self._actions:
            raise ValueError(f"Action '{action.id}' already registered")
        self._actions[action.id] = action
        return action

    def action(self, action_id: str) -> ActionRef:
        try:
            return self._actions[action_id]
        except KeyError as exc:
            raise KeyError(f"Action '{action_id}' is not registered") from exc

    def bind(self, binding: Binding) -> Binding:
        if binding.action_id not in self._actions:
            raise KeyError(
                f"{binding.mode}:{binding.key} references unknown action "
                f"'{binding.action_id}'"
            )
        slot = self._tables.setdefault(binding.mode, {}).setdefault(binding.key, [])
        conflicts = [existing for existing in slot if existing.overlaps(binding)]
        if conflicts:
            raise KeymapConflictError(binding, conflicts)
        slot.append(binding)
        return binding

    def modes(self) -> tuple[str, ...]:
        return tuple(sorted(self._tables))

    def bindings(self, mode: str) -> Iterator[Binding]:
        for slot in self._tables.get(mode, {}).values():
            yield from slot

    def lookup(
        self, mode: str, token: str, flags: Optional[Mapping[str, bool]] = None
    ) -> Optional[KeymapMatch]:
        """Binding for ``token`` in ``mode`` whose condition holds, if any."""

        active = flags or {}
        with span(
            "keymaps::lookup",
            logger_name=self._logger_name,
            metadata={"mode": mode, "key": token},
        ) as handle:
            for binding in self._tables.get(mode, {}).get(token, ()):
                if binding.allows(active):
                    handle.note("action", binding.action_id)
                    return KeymapMatch(binding, self._actions[binding.action_id])
            handle.note("action", None)
            return None


__all__ = ["KeymapRegistry", "KeymapConflictError"]
