from __future__ import annotations

from pathlib import Path

import pytest

from modedit.buffer import (
    UNTITLED,
    Document,
    DocumentIOError,
    DocumentRegistry,
    EmptyRegistryError,
    read_document_lines,
    write_document_lines,
)


def make_registry(count: int = 3) -> DocumentRegistry:
    registry = DocumentRegistry()
    for index in range(count):
        registry.add(Document.from_text(f"doc {index}", name=f"doc{index}.txt"))
    registry.current = 0
    return registry


def test_rotate_backward_wraps() -> None:
    registry = make_registry(3)

    assert registry.rotate_buffer(-1) == 2
    assert registry.active is not None
    assert registry.active.name == "doc2.txt"


def test_rotate_full_cycle_returns_to_start() -> None:
    registry = make_registry(4)
    registry.current = 1

    for _ in range(len(registry)):
        registry.rotate_buffer(1)

    assert registry.current == 1


def test_empty_registry_operations_raise() -> None:
    registry = DocumentRegistry()

    assert registry.is_empty
    assert registry.active is None
    with pytest.raises(EmptyRegistryError):
        registry.rotate_buffer(1)
    with pytest.raises(EmptyRegistryError):
        registry.close_buffer()
    with pytest.raises(EmptyRegistryError):
        registry.write_buffer()
    with pytest.raises(EmptyRegistryError):
        registry.rename_buffer("x")


def test_new_buffer_becomes_active() -> None:
    registry = make_registry(2)

    document = registry.new_buffer()

    assert registry.current == 2
    assert registry.active is document
    assert document.name == UNTITLED
    assert document.lines.snapshot() == ("",)


def test_close_buffer_moves_to_previous() -> None:
    registry = make_registry(3)
    registry.current = 2

    closed = registry.close_buffer()

    assert closed.name == "doc2.txt"
    assert registry.current == 1
    assert len(registry) == 2


def test_close_first_buffer_keeps_index_zero() -> None:
    registry = make_registry(2)

    registry.close_buffer()

    assert registry.current == 0
    assert registry.active is not None
    assert registry.active.name == "doc1.txt"


def test_close_last_document_leaves_empty_registry() -> None:
    registry = make_registry(1)
    registry.active.add_character("x")

    registry.close_buffer()

    assert registry.is_empty
    assert registry.current == 0
    assert registry.active is None
    assert registry.mirror().current is None


def test_rename_buffer_trims_name() -> None:
    registry = make_registry(1)

    registry.rename_buffer("  renamed.txt  ")

    assert registry.active.name == "renamed.txt"


def test_open_file_appends_and_activates(tmp_path: Path) -> None:
    path = tmp_path / "notes.txt"
    path.write_text("first\nsecond\n", encoding="utf-8")
    registry = make_registry(1)

    document = registry.open_file(path)

    assert registry.current == 1
    assert document.name == str(path)
    assert document.lines.snapshot() == ("first", "second")
    assert document.modified is False


def test_open_missing_file_leaves_registry_unchanged(tmp_path: Path) -> None:
    registry = make_registry(2)
    registry.current = 1

    with pytest.raises(DocumentIOError) as excinfo:
        registry.open_file(tmp_path / "missing.txt")

    assert excinfo.value.path == str(tmp_path / "missing.txt")
    assert len(registry) == 2
    assert registry.current == 1


def test_write_buffer_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "out.txt"
    registry = DocumentRegistry()
    document = registry.new_buffer()
    document.rename(str(path))
    for char in "hi":
        document.add_character(char)
    document.new_line()
    document.add_character("!")

    written = registry.write_buffer()

    assert path.read_text(encoding="utf-8") == "hi\n!\n"
    assert written == 5
    assert document.modified is False


def test_write_buffer_without_trailing_newline(tmp_path: Path) -> None:
    path = tmp_path / "plain.txt"
    registry = DocumentRegistry(trailing_newline=False)
    registry.add(Document.from_text("a\nb", name=str(path)))

    registry.write_buffer()

    assert path.read_bytes() == b"a\nb"


def test_write_failure_keeps_modified(tmp_path: Path) -> None:
    registry = DocumentRegistry()
    document = registry.add(
        Document.from_text("x", name=str(tmp_path / "no-such-dir" / "f.txt"))
    )
    document.add_character("y")

    with pytest.raises(DocumentIOError):
        registry.write_buffer()

    assert document.modified is True


def test_file_round_trip_preserves_lines(tmp_path: Path) -> None:
    path = tmp_path / "round.txt"

    write_document_lines(path, ["α", "", "β"])

    assert read_document_lines(path).snapshot() == ("α", "", "β")


def test_read_empty_file_gives_one_line(tmp_path: Path) -> None:
    path = tmp_path / "empty.txt"
    path.write_text("", encoding="utf-8")

    assert read_document_lines(path).snapshot() == ("",)


def test_read_rejects_invalid_utf8(tmp_path: Path) -> None:
    path = tmp_path / "binary.bin"
    path.write_bytes(b"\xff\xfe\x00")

    with pytest.raises(DocumentIOError):
        read_document_lines(path)


def test_mirror_lists_documents_in_order() -> None:
    registry = make_registry(2)
    registry.set_viewport_size(100, 40)

    mirror = registry.mirror()

    assert [doc.name for doc in mirror.documents] == ["doc0.txt", "doc1.txt"]
    assert mirror.current == 0
    assert mirror.viewport == (100, 40)
    assert mirror.active is not None and mirror.active.name == "doc0.txt"
