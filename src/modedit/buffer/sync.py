"""Read-only snapshots handed to the renderer, plus the buffer error family."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .state import Cursor, Selection


@dataclass(frozen=True, slots=True)
class DocumentMirror:
    """Read-only view of one document for a single frame."""

    name: str
    lines: Tuple[str, ...]
    modified: bool
    cursor: Cursor
    scroll_offset: int
    selection: Optional[Selection]

    @property
    def display_name(self) -> str:
        return self.name or "untitled"


@dataclass(frozen=True, slots=True)
class RegistryMirror:
    """Read-only view of every open document and the viewport."""

    documents: Tuple[DocumentMirror, ...]
    current: Optional[int]
    viewport: Tuple[int, int]

    @property
    def active(self) -> Optional[DocumentMirror]:
        if self.current is None:
            return None
        return self.documents[self.current]


class DocumentValidationError(RuntimeError):
    """Raised when a cursor position falls outside the document."""

    def __init__(self, message: str, *, cursor: Cursor | None = None) -> None:
        super().__init__(message)
        self.cursor = cursor


class LineIndexError(IndexError):
    """Raised when a line index is outside the line store."""

    def __init__(self, index: int, length: int) -> None:
        super().__init__(f"Line {index} out of range (0..{length})")
        self.index = index
        self.length = length


class EmptyRegistryError(RuntimeError):
    """Raised when a registry operation needs a document but none is open."""


class DocumentIOError(RuntimeError):
    """Raised when reading or writing a document's file fails."""

    def __init__(self, message: str, *, path: str) -> None:
        super().__init__(message)
        self.path = path
