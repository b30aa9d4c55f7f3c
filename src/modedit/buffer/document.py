"""Document: one line store plus its cursor, selection and scroll state."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional

from modedit.runtime import telemetry

from .lines import LineStore
from .state import Cursor, Selection, SelectionState
from .sync import DocumentMirror
from .validation import clamp_cursor, ensure_cursor

UNTITLED = "untitled"


class Document:
    """Funnels every buffer mutation so cursor and selection stay valid.

    Invariants after each public call::

        0 <= cursor_line < max(1, lines.num_lines)
        0 <= cursor_position <= lines.line_char_length(cursor_line)
    """

    def __init__(
        self,
        *,
        name: str = UNTITLED,
        lines: Optional[LineStore] = None,
    ) -> None:
        self.name = name
        self.lines = lines if lines is not None else LineStore()
        self.cursor_line = 0
        self.cursor_position = 0
        self.scroll_offset = 0
        self.modified = False
        self._selection = SelectionState()

    @classmethod
    def from_text(cls, text: str, *, name: str = UNTITLED) -> "Document":
        return cls(name=name, lines=LineStore.from_text(text))

    @property
    def cursor(self) -> Cursor:
        return (self.cursor_line, self.cursor_position)

    @property
    def text(self) -> str:
        return "\n".join(self.lines.snapshot())

    @property
    def selection_start(self) -> Optional[Cursor]:
        return self._selection.start

    @property
    def selection_end(self) -> Optional[Cursor]:
        return self._selection.end

    def set_cursor(self, line: int, position: int) -> None:
        self.cursor_line, self.cursor_position = ensure_cursor(
            self.lines, (line, position)
        )

    def current_line(self) -> str:
        return self.lines.line_at(self.cursor_line) or ""

    def _current_length(self) -> int:
        return self.lines.line_char_length(self.cursor_line) or 0

    def _ensure_line(self) -> None:
        if self.lines.num_lines == 0:
            self.lines.insert_line_at(0, "")
            self.cursor_line = 0
            self.cursor_position = 0

    def _clamp(self) -> None:
        self.cursor_line, self.cursor_position = clamp_cursor(
            self.lines, self.cursor_line, self.cursor_position
        )

    @contextmanager
    def _edit(self, label: str) -> Iterator[None]:
        with telemetry.span(
            f"document::{label}",
            component="document",
            metadata={"document": self.name},
        ):
            self._ensure_line()
            yield
            self.modified = True

    # -- editing -------------------------------------------------------

    # Selection ends stay on the same text as lines are edited, split or joined.

    def add_character(self, char: str) -> None:
        with self._edit("add_character"):
            row, pos = self.cursor
            line = self.current_line()
            self.lines.set_line_at(row, line[:pos] + char + line[pos:])
            self.cursor_position += 1
            self._selection.remap(
                lambda p: (row, p[1] + 1) if p[0] == row and p[1] >= pos else p
            )

    def remove_character(self) -> None:
        """Backspace.

        At column 0 the current line is merged onto the previous one and the
        cursor lands on the join. At ``(0, 0)`` the content is left alone.
        """

        with self._edit("remove_character"):
            row, pos = self.cursor
            if pos > 0:
                line = self.current_line()
                self.lines.set_line_at(row, line[: pos - 1] + line[pos:])
                self.cursor_position -= 1
                self._selection.remap(
                    lambda p: (row, p[1] - 1) if p[0] == row and p[1] >= pos else p
                )
            elif row > 0:
                join_at = self.lines.line_char_length(row - 1) or 0
                self.lines.merge_lines(row - 1, row)
                self.cursor_line, self.cursor_position = row - 1, join_at

                def joined(p: Cursor) -> Cursor:
                    if p[0] == row:
                        return (row - 1, join_at + p[1])
                    return (p[0] - 1, p[1]) if p[0] > row else p

                self._selection.remap(joined)

    def new_line(self) -> None:
        with self._edit("new_line"):
            row, pos = self.cursor
            self.lines.break_line_at(row, pos)
            self.cursor_line, self.cursor_position = row + 1, 0

            def split(p: Cursor) -> Cursor:
                if p[0] == row and p[1] >= pos:
                    return (row + 1, p[1] - pos)
                return (p[0] + 1, p[1]) if p[0] > row else p

            self._selection.remap(split)

    # -- movement ------------------------------------------------------

    def move_cursor_left(self) -> None:
        if self.cursor_position > 0:
            self.cursor_position -= 1
        elif self.cursor_line > 0:
            self.cursor_line -= 1
            self.cursor_position = self._current_length()

    def move_cursor_right(self) -> None:
        if self.cursor_position < self._current_length():
            self.cursor_position += 1
        elif self.cursor_line < self.lines.num_lines - 1:
            self.cursor_line += 1
            self.cursor_position = 0

    def move_cursor_up(self) -> None:
        if self.cursor_line > 0:
            self.cursor_line -= 1
            self._clamp()

    def move_cursor_down(self) -> None:
        if self.cursor_line < self.lines.num_lines - 1:
            self.cursor_line += 1
            self._clamp()

    def move_cursor_page_up(self, height: int) -> None:
        self.cursor_line = max(0, self.cursor_line - max(1, height))
        self._clamp()

    def move_cursor_page_down(self, height: int) -> None:
        last = max(0, self.lines.num_lines - 1)
        self.cursor_line = min(last, self.cursor_line + max(1, height))
        self._clamp()

    def goto_line_start(self) -> None:
        self.cursor_position = 0

    def goto_line_end(self) -> None:
        self.cursor_position = self._current_length()

    def skip_word_forward(self) -> None:
        """Skip whitespace, then the following word; stops at end of line."""

        line = self.current_line()
        pos = self.cursor_position
        while pos < len(line) and line[pos].isspace():
            pos += 1
        while pos < len(line) and not line[pos].isspace():
            pos += 1
        self.cursor_position = pos

    def skip_word_backward(self) -> None:
        """Mirror of ``skip_word_forward``; stops at column 0."""

        line = self.current_line()
        pos = self.cursor_position
        while pos > 0 and line[pos - 1].isspace():
            pos -= 1
        while pos > 0 and not line[pos - 1].isspace():
            pos -= 1
        self.cursor_position = pos

    def update_scroll_position(self, viewport_height: int) -> None:
        height = max(1, viewport_height)
        last = max(0, self.lines.num_lines - 1)
        self.cursor_line = max(0, min(self.cursor_line, last))

        row = self.cursor_line - self.scroll_offset
        if row < 0:
            self.scroll_offset = 0
            row = self.cursor_line
        if row >= height:
            self.scroll_offset = self.cursor_line - height + 1

        self._clamp()

    # -- selection -----------------------------------------------------

    def clear_selection(self) -> None:
        self._selection.clear()

    def extend_selection_to_cursor(self) -> None:
        self._selection.extend_to(self.cursor)

    def selection(self) -> Optional[Selection]:
        return self._selection.as_pair()

    def ordered_selection(self) -> Optional[Selection]:
        return self._selection.ordered()

    def selected_text(self) -> str:
        ordered = self.ordered_selection()
        if ordered is None:
            return ""
        (start_row, start_col), (end_row, end_col) = (
            clamp_cursor(self.lines, *ordered[0]),
            clamp_cursor(self.lines, *ordered[1]),
        )
        lines = self.lines.snapshot()
        if start_row == end_row:
            return lines[start_row][start_col:end_col]
        parts = [lines[start_row][start_col:]]
        parts.extend(lines[start_row + 1 : end_row])
        parts.append(lines[end_row][:end_col])
        return "\n".join(parts)

    # -- bookkeeping ---------------------------------------------------

    def rename(self, name: str) -> None:
        cleaned = name.strip()
        if not cleaned:
            raise ValueError("Document name cannot be empty")
        self.name = cleaned

    def mark_saved(self) -> None:
        self.modified = False

    def mirror(self) -> DocumentMirror:
        return DocumentMirror(
            name=self.name,
            lines=tuple(self.lines.snapshot()),
            modified=self.modified,
            cursor=self.cursor,
            scroll_offset=self.scroll_offset,
            selection=self.selection(),
        )


__all__ = ["Document", "UNTITLED"]
