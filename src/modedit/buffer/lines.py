"""Line store: the ordered list of lines behind one document."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Sequence

from .sync import LineIndexError


@dataclass(slots=True)
class LineStore:
    """Plain list-of-lines storage.

    Offsets are counted in code points, so ``str`` slicing is enough. Lines
    never carry their terminator. An empty store is allowed but documents
    keep at least one line.
    """

    _lines: List[str] = field(default_factory=lambda: [""])

    @classmethod
    def from_text(cls, text: str) -> "LineStore":
        """Split ``text`` on ``\\n``; a final terminator adds no extra line."""

        lines = text.split("\n")
        if len(lines) > 1 and lines[-1] == "":
            lines.pop()
        return cls(_lines=[line[:-1] if line.endswith("\r") else line for line in lines])

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "LineStore":
        return cls(_lines=list(lines))

    def to_text(self, *, trailing_newline: bool = True) -> str:
        if trailing_newline:
            return "".join(f"{line}\n" for line in self._lines)
        return "\n".join(self._lines)

    def snapshot(self) -> Sequence[str]:
        return tuple(self._lines)

    @property
    def num_lines(self) -> int:
        return len(self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._lines))

    def line_at(self, index: int) -> Optional[str]:
        if 0 <= index < len(self._lines):
            return self._lines[index]
        return None

    def set_line_at(self, index: int, line: str) -> bool:
        """Replace line ``index``; returns ``False`` when out of range."""

        if 0 <= index < len(self._lines):
            self._lines[index] = line
            return True
        return False

    def char_at(self, index: int, position: int) -> Optional[str]:
        line = self.line_at(index)
        if line is None or not 0 <= position < len(line):
            return None
        return line[position]

    def line_char_length(self, index: int) -> Optional[int]:
        line = self.line_at(index)
        if line is None:
            return None
        return len(line)

    def insert_line_at(self, index: int, line: str) -> None:
        if index > len(self._lines):
            self._lines.append(line)
            return
        self._lines.insert(max(0, index), line)

    def remove_line_at(self, index: int) -> str:
        if not 0 <= index < len(self._lines):
            raise LineIndexError(index, len(self._lines))
        return self._lines.pop(index)

    def break_line_at(self, index: int, position: int) -> None:
        line = self.line_at(index)
        if line is None:
            raise LineIndexError(index, len(self._lines))
        position = max(0, min(position, len(line)))
        self._lines[index : index + 1] = [line[:position], line[position:]]

    def merge_lines(self, first: int, second: int) -> None:
        """Append line ``second`` onto line ``first`` and drop ``second``."""

        if second != first + 1:
            raise ValueError(f"Cannot merge non-adjacent lines {first} and {second}")
        if first < 0 or second >= len(self._lines):
            raise LineIndexError(second if first >= 0 else first, len(self._lines))
        self._lines[first : second + 1] = [self._lines[first] + self._lines[second]]


__all__ = ["LineStore"]
