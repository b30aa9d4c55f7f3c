"""Validation helpers shared across buffer services."""

from __future__ import annotations

from .lines import LineStore
from .state import Cursor
from .sync import DocumentValidationError


def ensure_cursor(lines: LineStore, cursor: Cursor) -> Cursor:
    row, col = cursor
    if row < 0 or row >= max(1, lines.num_lines):
        raise DocumentValidationError("Line out of range", cursor=cursor)
    length = lines.line_char_length(row) or 0
    if col < 0 or col > length:
        raise DocumentValidationError("Position out of range", cursor=cursor)
    return cursor


def clamp_cursor(lines: LineStore, row: int, col: int) -> Cursor:
    max_row = max(0, lines.num_lines - 1)
    row = max(0, min(row, max_row))
    length = lines.line_char_length(row) or 0
    return (row, max(0, min(col, length)))
