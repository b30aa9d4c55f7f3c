"""Key tokens, bindings and the actions they point at."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Mapping, Optional

MODIFIER_SEPARATOR = "+"


def make_token(key: str, modifiers: Iterable[str] = ()) -> str:
    """Canonical lookup token: sorted lower-case modifiers, then the key.

    ``make_token("LEFT", ["Ctrl"])`` is ``"ctrl+LEFT"``. Named keys keep
    their upper-case spelling; a plain key is its own token.
    """

    if not key:
        raise ValueError("key cannot be empty")
    mods = sorted({m.strip().lower() for m in modifiers if m.strip()})
    return MODIFIER_SEPARATOR.join([*mods, key])


def parse_token(text: str) -> str:
    """Normalize a ``"ctrl+e"`` style key description; ``"+"`` is the plus key."""

    if text == MODIFIER_SEPARATOR or MODIFIER_SEPARATOR not in text:
        return make_token(text)
    *mods, key = text.split(MODIFIER_SEPARATOR)
    return make_token(key or MODIFIER_SEPARATOR, mods)


@dataclass(frozen=True, slots=True)
class ActionRef:
    id: str
    handler: Callable[..., object]
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("action id cannot be empty")
        if not callable(self.handler):
            raise TypeError(f"handler for '{self.id}' must be callable")

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.handler(*args, **kwargs)


@dataclass(frozen=True, slots=True)
class Binding:
    """One key in one mode, optionally gated on a context flag.

    ``when`` is ``"flag"`` or ``"!flag"``; the binding then only applies
    while the flag is set (or cleared). Keys are stored as tokens.
    """

    mode: str
    key: str
    action_id: str
    when: Optional[str] = None
    description: str = ""

    def __post_init__(self) -> None:
        if not self.mode:
            raise ValueError("binding mode cannot be empty")
        if not self.action_id:
            raise ValueError("binding action_id cannot be empty")
        object.__setattr__(self, "key", parse_token(self.key))
        if self.when is not None and not self.when.lstrip("!"):
            raise ValueError(f"empty when clause on {self.mode}:{self.key}")

    @property
    def condition(self) -> Optional[tuple[str, bool]]:
        if self.when is None:
            return None
        if self.when.startswith("!"):
            return self.when[1:], False
        return self.when, True

    def allows(self, flags: Mapping[str, bool]) -> bool:
        condition = self.condition
        if condition is None:
            return True
        flag, expected = condition
        return bool(flags.get(flag, False)) is expected

    def overlaps(self, other: "Binding") -> bool:
        """Whether both bindings could fire for the same key at once."""

        if self.mode != other.mode or self.key != other.key:
            return False
        mine, theirs = self.condition, other.condition
        if mine is None or theirs is None:
            return True
        return mine[0] != theirs[0] or mine[1] == theirs[1]


@dataclass(frozen=True, slots=True)
class KeymapMatch:
    """The binding a key resolved to, with its action."""

    binding: Binding
    action: ActionRef


__all__ = [
    "ActionRef",
    "Binding",
    "KeymapMatch",
    "make_token",
    "parse_token",
]
