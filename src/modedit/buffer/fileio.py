"""Flat read-once / write-once file access for documents."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from modedit.runtime import telemetry

from .lines import LineStore
from .sync import DocumentIOError

ENCODING = "utf-8"


def read_document_lines(path: str | Path) -> LineStore:
    target = Path(path)
    with telemetry.span(
        "fileio::read", component="fileio", metadata={"path": str(target)}
    ):
        try:
            text = target.read_text(encoding=ENCODING)
        except (OSError, UnicodeDecodeError) as exc:
            raise DocumentIOError(
                f"Cannot open '{target}': {exc}", path=str(target)
            ) from exc
    return LineStore.from_text(text)


def write_document_lines(
    path: str | Path, lines: Sequence[str], *, trailing_newline: bool = True
) -> int:
    """Write ``lines`` with a ``\\n`` after each one; returns bytes written."""

    target = Path(path)
    payload = LineStore.from_lines(lines).to_text(trailing_newline=trailing_newline)
    data = payload.encode(ENCODING)
    with telemetry.span(
        "fileio::write", component="fileio", metadata={"path": str(target)}
    ):
        try:
            target.write_bytes(data)
        except OSError as exc:
            raise DocumentIOError(
                f"Cannot write '{target}': {exc}", path=str(target)
            ) from exc
    return len(data)


__all__ = ["read_document_lines", "write_document_lines", "ENCODING"]
