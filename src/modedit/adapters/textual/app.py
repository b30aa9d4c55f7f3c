"""Executable Textual app that hosts the editor core."""

from __future__ import annotations

import argparse
import os
from typing import Any, Optional, Sequence

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.containers import Vertical
from textual.widgets import Static

from modedit.buffer import DocumentIOError, DocumentMirror
from modedit.editor import create_default_manager
from modedit.modes.mode_manager import EditorSnapshot, ModeManager, PopupView
from modedit.runtime import telemetry

from .controller import (
    TextualEditorAdapter,
    TextualUIHooks,
    buffer_tabs,
    status_line,
    visible_lines,
)


def render_document(document: DocumentMirror, height: int) -> Text:
    """Draw the visible lines with the cursor and selection highlighted."""

    ordered = None
    if document.selection is not None:
        ordered = tuple(sorted(document.selection))
    cursor_line, cursor_col = document.cursor
    text = Text()
    for offset, line in enumerate(visible_lines(document, height)):
        row = document.scroll_offset + offset
        rendered = Text(line + " ")
        if ordered is not None:
            (start_row, start_col), (end_row, end_col) = ordered
            if start_row <= row <= end_row:
                begin = start_col if row == start_row else 0
                finish = end_col if row == end_row else len(line)
                rendered.stylize("on dark_blue", begin, finish)
        if row == cursor_line:
            rendered.stylize("reverse", cursor_col, cursor_col + 1)
        text.append_text(rendered)
        text.append("\n")
    return text


def render_popup(popup: PopupView) -> Text:
    title = "Rename buffer" if popup.kind == "rename_buffer" else "Open file"
    text = Text(f"{title}: ", style="bold")
    text.append(popup.text)
    text.append("█")
    for index, suggestion in enumerate(popup.suggestions):
        style = "reverse" if index == popup.selected else ""
        text.append("\n  ")
        text.append(suggestion, style=style)
    if popup.error:
        text.append(f"\n{popup.error}", style="bold red")
    return text


class ModeditApp(App[None]):
    """Textual UI embedding the editor core."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#tab-bar {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}

	#document-view {
		height: 1fr;
		border: round $accent;
		padding: 0 1;
		content-align: left top;
	}

	#popup {
		display: none;
		height: auto;
		max-height: 14;
		border: round $warning;
		padding: 0 1;
	}

	#status-line {
		height: 1;
		background: $surface-darken-2;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
    ]

    def __init__(self, manager: ModeManager) -> None:
        super().__init__()
        self.manager = manager
        self.adapter: TextualEditorAdapter | None = None
        self._message = ""
        self._tabs: Static | None = None
        self._document: Static | None = None
        self._popup: Static | None = None
        self._status: Static | None = None

    def compose(self) -> ComposeResult:
        self._tabs = Static("", id="tab-bar")
        self._document = Static("", id="document-view")
        self._popup = Static("", id="popup")
        self._status = Static("", id="status-line")
        yield self._tabs
        with Vertical(id="document-area"):
            yield self._document
            yield self._popup
        yield self._status

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_view=self._update_view,
            update_status=self._update_status,
            handle_event=self._handle_event,
            request_exit=self.exit,
            log=self._log_line,
        )
        self.adapter = TextualEditorAdapter(self.manager, hooks)
        self.call_after_refresh(self._sync_viewport)

    def on_resize(self, event: events.Resize) -> None:
        del event
        self.call_after_refresh(self._sync_viewport)

    def on_key(self, event: events.Key) -> None:
        if not self.adapter or event.key == "ctrl+c":
            return
        self.adapter.handle_textual_key(event.key, character=event.character)
        event.stop()

    def _sync_viewport(self) -> None:
        if self.adapter and self._document:
            size = self._document.content_size
            self.adapter.push_viewport(size.width, size.height)

    def _update_view(self, snapshot: EditorSnapshot) -> None:
        height = snapshot.viewport[1]
        if self._tabs:
            tabs, truncated = buffer_tabs(snapshot.documents, snapshot.current)
            bar = Text()
            for label, active in tabs:
                bar.append(f"{label}|", style="bold yellow" if active else "")
                bar.append(" ")
            if truncated:
                bar.append("...")
            bar.append(f"  [{snapshot.mode_label}]", style="bold")
            self._tabs.update(bar)
        if self._document:
            document = snapshot.active
            self._document.update(
                render_document(document, height) if document is not None else ""
            )
        if self._popup:
            self._popup.display = snapshot.popup is not None
            if snapshot.popup is not None:
                self._popup.update(render_popup(snapshot.popup))
        if self._status:
            line = status_line(snapshot)
            if self._message:
                line = f"{line} | {self._message}"
            self._status.update(line)

    def _update_status(self, message: str) -> None:
        self._message = message

    def _handle_event(self, name: str, payload: Any | None) -> None:
        if name == "mode.switch":
            self._message = ""

    def _log_line(self, line: str) -> None:
        telemetry.get_logger("modedit.app").debug(line)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="modedit", description="Modal terminal text editor."
    )
    parser.add_argument(
        "path",
        nargs="?",
        help="File to open; the editor then starts in insert mode",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    # The terminal belongs to the renderer; log to a file or not at all.
    telemetry.configure(
        preset="file" if os.getenv("MODEDIT_LOG_FILE") else "quiet"
    )
    try:
        manager = create_default_manager(args.path)
    except DocumentIOError as exc:
        telemetry.get_logger("modedit.app").error(str(exc))
        print(f"modedit: {exc}")
        return 1
    ModeditApp(manager).run()
    return 0


if __name__ == "__main__":  # pragma: no cover - manual run
    raise SystemExit(main())
