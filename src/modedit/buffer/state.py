"""Cursor and selection types shared by documents and snapshots."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Tuple

Cursor = Tuple[int, int]  # (line, position)
Selection = Tuple[Cursor, Cursor]  # (anchor, cursor), not normalized


@dataclass(slots=True)
class SelectionState:
    """Independently nullable selection endpoints."""

    start: Optional[Cursor] = None
    end: Optional[Cursor] = None

    def clear(self) -> None:
        self.start = None
        self.end = None

    def extend_to(self, cursor: Cursor) -> None:
        if self.start is None:
            self.start = cursor
        self.end = cursor

    def remap(self, move: Callable[[Cursor], Cursor]) -> None:
        """Carry both ends along with an edit that shifted the text."""

        if self.start is not None:
            self.start = move(self.start)
        if self.end is not None:
            self.end = move(self.end)

    def as_pair(self) -> Optional[Selection]:
        if self.start is None or self.end is None:
            return None
        return (self.start, self.end)

    def ordered(self) -> Optional[Selection]:
        pair = self.as_pair()
        if pair is None:
            return None
        start, end = pair
        if start <= end:
            return start, end
        return end, start
