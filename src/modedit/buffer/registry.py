"""Document registry: the ordered set of open documents."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from modedit.runtime import telemetry

from .document import UNTITLED, Document
from .fileio import read_document_lines, write_document_lines
from .sync import EmptyRegistryError, RegistryMirror


class DocumentRegistry:
    """Sole owner of open documents.

    Insertion order is the rotation order. ``current`` is only meaningful
    while the registry is non-empty.
    """

    def __init__(
        self,
        *,
        viewport_size: Tuple[int, int] = (80, 24),
        trailing_newline: bool = True,
    ) -> None:
        self.documents: List[Document] = []
        self.current = 0
        self.viewport_size = viewport_size
        self.trailing_newline = trailing_newline
        self.logger = telemetry.get_logger("modedit.registry")

    def __len__(self) -> int:
        return len(self.documents)

    def __iter__(self) -> Iterator[Document]:
        return iter(list(self.documents))

    @property
    def is_empty(self) -> bool:
        return not self.documents

    @property
    def active(self) -> Optional[Document]:
        if self.is_empty:
            return None
        return self.documents[self.current]

    @property
    def viewport_height(self) -> int:
        return self.viewport_size[1]

    def set_viewport_size(self, width: int, height: int) -> None:
        self.viewport_size = (max(0, width), max(0, height))

    def _require_active(self, operation: str) -> Document:
        document = self.active
        if document is None:
            raise EmptyRegistryError(f"Cannot {operation}: no document is open")
        return document

    def add(self, document: Document) -> Document:
        self.documents.append(document)
        self.current = len(self.documents) - 1
        return document

    def rotate_buffer(self, direction: int) -> int:
        if self.is_empty:
            raise EmptyRegistryError("Cannot rotate: no document is open")
        self.current = (self.current + direction) % len(self.documents)
        return self.current

    def new_buffer(self) -> Document:
        document = self.add(Document(name=UNTITLED))
        telemetry.record_event(
            "registry.new_buffer",
            data={"index": self.current},
            logger_name="modedit.registry",
        )
        return document

    def close_buffer(self) -> Document:
        document = self._require_active("close")
        if document.modified:
            self.logger.warning(
                f"Closing '{document.name}' discards unsaved changes"
            )
        del self.documents[self.current]
        self.current = max(0, self.current - 1)
        telemetry.record_event(
            "registry.close_buffer",
            data={"name": document.name, "remaining": len(self.documents)},
            logger_name="modedit.registry",
        )
        return document

    def open_file(self, path: str | Path) -> Document:
        """Load ``path`` into a new active document.

        Raises ``DocumentIOError`` and leaves the registry untouched when the
        file cannot be read.
        """

        lines = read_document_lines(path)
        document = self.add(Document(name=str(path), lines=lines))
        telemetry.record_event(
            "registry.open_file",
            data={"path": str(path), "lines": lines.num_lines},
            logger_name="modedit.registry",
        )
        return document

    def rename_buffer(self, name: str) -> Document:
        document = self._require_active("rename")
        document.rename(name)
        return document

    def write_buffer(self) -> int:
        document = self._require_active("write")
        written = write_document_lines(
            document.name,
            document.lines.snapshot(),
            trailing_newline=self.trailing_newline,
        )
        document.mark_saved()
        telemetry.record_event(
            "registry.write_buffer",
            data={"name": document.name, "bytes": written},
            logger_name="modedit.registry",
        )
        return written

    def mirror(self) -> RegistryMirror:
        return RegistryMirror(
            documents=tuple(document.mirror() for document in self.documents),
            current=None if self.is_empty else self.current,
            viewport=self.viewport_size,
        )


__all__ = ["DocumentRegistry"]
