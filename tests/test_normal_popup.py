from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import pytest

from modedit.buffer import Document
from modedit.editor import create_default_manager
from modedit.modes import EditorMode, KeyInput, ModeResult, Popup
from modedit.modes.mode_manager import ModeManager
from modedit.modes.popup import popup_state
from modedit.runtime import EditorSettings


def make_manager(*names: str) -> ModeManager:
    manager = create_default_manager(settings=EditorSettings())
    for name in names:
        manager.context.registry.add(Document(name=name))
    if names:
        manager.context.registry.current = 0
    return manager


def press(manager: ModeManager, key: str, *modifiers: str) -> ModeResult:
    text: Optional[str] = key if len(key) == 1 and not modifiers else None
    return manager.handle_key(KeyInput(key=key, modifiers=modifiers, text=text))


def type_keys(manager: ModeManager, text: str) -> None:
    for char in text:
        press(manager, char)


@pytest.fixture
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    (tmp_path / "notes.txt").write_text("remember\n", encoding="utf-8")
    (tmp_path / "nested").mkdir()
    (tmp_path / "nested" / "todo.md").write_text("- item\n", encoding="utf-8")
    (tmp_path / ".hidden").write_text("secret\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_new_and_close_buffers() -> None:
    manager = make_manager()
    events: List[object] = []
    manager.context.bus.subscribe("buffer.new", events.append)
    manager.context.bus.subscribe("buffer.close", events.append)

    press(manager, "n")
    press(manager, "n")
    assert len(manager.context.registry) == 2
    assert manager.context.registry.current == 1

    press(manager, "c")
    press(manager, "c")
    assert manager.context.registry.is_empty
    assert events == ["untitled", "untitled", "untitled", "untitled"]


def test_close_on_empty_registry_is_guarded() -> None:
    manager = make_manager()

    result = press(manager, "c")

    assert result.status == "no_document"
    assert manager.context.registry.is_empty


def test_arrows_rotate_buffers() -> None:
    manager = make_manager("a", "b", "c")
    rotations: List[object] = []
    manager.context.bus.subscribe("buffer.rotate", rotations.append)

    press(manager, "LEFT")
    press(manager, "RIGHT")
    press(manager, "RIGHT")

    assert rotations == [2, 0, 1]


def test_write_buffer_to_its_name(tmp_path: Path) -> None:
    path = tmp_path / "saved.txt"
    manager = make_manager(str(path))
    manager.context.registry.active.add_character("z")
    writes: List[object] = []
    manager.context.bus.subscribe("buffer.write", writes.append)

    result = press(manager, "w")

    assert result.status == "buffer"
    assert path.read_text(encoding="utf-8") == "z\n"
    assert manager.context.registry.active.modified is False
    assert writes == [{"name": str(path), "bytes": 2}]


def test_write_failure_is_reported_not_raised(tmp_path: Path) -> None:
    manager = make_manager(str(tmp_path / "missing" / "file.txt"))
    errors: List[object] = []
    manager.context.bus.subscribe("editor.error", errors.append)

    result = press(manager, "w")

    assert result.status == "error"
    assert errors and "missing" in str(errors[0])
    assert manager.active_name is EditorMode.NORMAL


def test_rename_popup_prefills_and_commits() -> None:
    manager = make_manager("old.txt")
    renames: List[object] = []
    manager.context.bus.subscribe("buffer.rename", renames.append)

    press(manager, "a")
    popup = popup_state(manager.context)
    assert popup.kind is Popup.RENAME_BUFFER
    assert popup.text == "old.txt"

    for _ in range(len("old.txt")):
        press(manager, "BACKSPACE")
    type_keys(manager, "new name.txt ")
    press(manager, "ENTER")

    assert manager.context.registry.active.name == "new name.txt"
    assert renames == ["new name.txt"]
    assert not popup_state(manager.context).is_open


def test_rename_popup_letters_are_text_not_commands() -> None:
    manager = make_manager("doc")
    press(manager, "a")

    type_keys(manager, "ncw")

    assert popup_state(manager.context).text == "docncw"
    assert len(manager.context.registry) == 1


def test_rename_popup_rejects_blank_name() -> None:
    manager = make_manager("doc")
    press(manager, "a")
    for _ in range(3):
        press(manager, "BACKSPACE")
    type_keys(manager, "   ")

    result = press(manager, "ENTER")

    popup = popup_state(manager.context)
    assert result.status == "popup"
    assert popup.is_open
    assert popup.error
    assert manager.context.registry.active.name == "doc"


def test_rename_needs_a_document() -> None:
    manager = make_manager()

    result = press(manager, "a")

    assert result.status == "no_document"
    assert not popup_state(manager.context).is_open


def test_normal_mode_key_dismisses_popup() -> None:
    manager = make_manager("doc")
    closed: List[object] = []
    manager.context.bus.subscribe("popup.close", closed.append)
    press(manager, "a")

    press(manager, "n", "ctrl")

    assert not popup_state(manager.context).is_open
    assert closed == ["rename_buffer"]
    press(manager, "n")
    assert len(manager.context.registry) == 2


def test_leaving_normal_dismisses_popup() -> None:
    manager = make_manager("doc")
    press(manager, "a")

    press(manager, "e", "ctrl")

    assert manager.active_name is EditorMode.INSERT
    assert not popup_state(manager.context).is_open
    assert manager.snapshot().popup is None


def test_open_popup_lists_visible_files(project: Path) -> None:
    manager = make_manager()

    press(manager, "o")

    snapshot = manager.snapshot()
    assert snapshot.popup is not None
    assert snapshot.popup.kind == "open_file"
    assert snapshot.popup.suggestions == ("nested/todo.md", "notes.txt")


def test_open_popup_filters_and_opens(project: Path) -> None:
    manager = make_manager()
    opened: List[object] = []
    manager.context.bus.subscribe("buffer.open", opened.append)
    press(manager, "o")

    type_keys(manager, "not")
    assert popup_state(manager.context).suggestions == ["notes.txt"]
    press(manager, "ENTER")

    document = manager.context.registry.active
    assert document is not None
    assert document.name == "notes.txt"
    assert document.lines.snapshot() == ("remember",)
    assert opened == ["notes.txt"]
    assert manager.snapshot().popup is None


def test_open_popup_arrow_keys_pick_suggestion(project: Path) -> None:
    manager = make_manager()
    press(manager, "o")

    press(manager, "DOWN")
    assert popup_state(manager.context).highlighted == "notes.txt"
    press(manager, "UP")
    assert popup_state(manager.context).highlighted == "nested/todo.md"
    press(manager, "UP")
    press(manager, "ENTER")

    assert manager.context.registry.active.name == "notes.txt"


def test_open_popup_tab_completes_query(project: Path) -> None:
    manager = make_manager()
    press(manager, "o")
    type_keys(manager, "todo")

    press(manager, "TAB")

    assert popup_state(manager.context).text == "nested/todo.md"
    press(manager, "ENTER")
    assert manager.context.registry.active.lines.snapshot() == ("- item",)


def test_open_popup_failure_stays_open(project: Path) -> None:
    manager = make_manager()
    errors: List[object] = []
    manager.context.bus.subscribe("editor.error", errors.append)
    press(manager, "o")
    type_keys(manager, "missing.txt")

    result = press(manager, "ENTER")

    popup = popup_state(manager.context)
    assert result.status == "error"
    assert popup.is_open
    assert popup.error
    assert errors
    assert manager.context.registry.is_empty
