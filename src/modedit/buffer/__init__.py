"""Line store, documents, and the document registry."""

from .document import UNTITLED, Document
from .fileio import read_document_lines, write_document_lines
from .lines import LineStore
from .registry import DocumentRegistry
from .state import Cursor, Selection, SelectionState
from .sync import (
    DocumentIOError,
    DocumentMirror,
    DocumentValidationError,
    EmptyRegistryError,
    LineIndexError,
    RegistryMirror,
)
from .validation import clamp_cursor, ensure_cursor

__all__ = [
    "Cursor",
    "Selection",
    "SelectionState",
    "LineStore",
    "Document",
    "UNTITLED",
    "DocumentRegistry",
    "DocumentMirror",
    "RegistryMirror",
    "DocumentIOError",
    "DocumentValidationError",
    "EmptyRegistryError",
    "LineIndexError",
    "read_document_lines",
    "write_document_lines",
    "ensure_cursor",
    "clamp_cursor",
]
