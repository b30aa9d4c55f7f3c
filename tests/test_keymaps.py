from __future__ import annotations

from typing import Any

import pytest

from modedit.keymaps import (
    ActionRef,
    Binding,
    KeymapConflictError,
    KeymapRegistry,
    make_token,
    parse_token,
)
from modedit.keymaps.defaults import MOTION_KEYS, load_default_keymaps
from modedit.runtime import EditorSettings


def _handler(*_: Any) -> None:
    return None


def make_registry(*action_ids: str) -> KeymapRegistry:
    registry = KeymapRegistry()
    for action_id in action_ids:
        registry.register_action(ActionRef(action_id, _handler))
    return registry


def defaults(settings: EditorSettings | None = None) -> KeymapRegistry:
    return load_default_keymaps(KeymapRegistry(), settings=settings)


def test_tokens_sort_and_lowercase_modifiers() -> None:
    assert make_token("LEFT", ["Ctrl", "ctrl"]) == "ctrl+LEFT"
    assert make_token("e", ["shift", "ctrl"]) == "ctrl+shift+e"
    assert make_token("x") == "x"
    assert parse_token("Ctrl+e") == "ctrl+e"
    assert parse_token("+") == "+"
    assert parse_token("ctrl++") == "ctrl++"


def test_binding_stores_normalized_token() -> None:
    binding = Binding("global", "Ctrl+e", "core.enter_insert")

    assert binding.key == "ctrl+e"
    assert binding.allows({}) is True


def test_binding_rejects_empty_condition() -> None:
    with pytest.raises(ValueError):
        Binding("normal", "n", "buffer.new", when="!")


def test_action_handler_must_be_callable() -> None:
    with pytest.raises(TypeError):
        ActionRef("broken", "not callable")  # type: ignore[arg-type]


def test_duplicate_action_is_rejected() -> None:
    registry = make_registry("buffer.new")

    with pytest.raises(ValueError):
        registry.register_action(ActionRef("buffer.new", _handler))


def test_bind_requires_known_action() -> None:
    registry = make_registry()

    with pytest.raises(KeyError):
        registry.bind(Binding("normal", "n", "buffer.new"))


def test_same_key_twice_conflicts() -> None:
    registry = make_registry("buffer.new", "buffer.close")
    registry.bind(Binding("normal", "n", "buffer.new"))

    with pytest.raises(KeymapConflictError) as info:
        registry.bind(Binding("normal", "n", "buffer.close", when="popup_open"))

    assert [b.action_id for b in info.value.conflicts] == ["buffer.new"]


def test_same_key_in_other_mode_is_fine() -> None:
    registry = make_registry("buffer.new", "navigate.page_down")
    registry.bind(Binding("normal", "n", "buffer.new"))
    registry.bind(Binding("navigate", "n", "navigate.page_down"))

    assert registry.modes() == ("navigate", "normal")


def test_opposite_conditions_share_a_key() -> None:
    registry = make_registry("popup.commit", "buffer.next")
    registry.bind(Binding("normal", "ENTER", "popup.commit", when="popup_open"))
    registry.bind(Binding("normal", "ENTER", "buffer.next", when="!popup_open"))

    opened = registry.lookup("normal", "ENTER", {"popup_open": True})
    closed = registry.lookup("normal", "ENTER", {"popup_open": False})

    assert opened is not None and opened.action.id == "popup.commit"
    assert closed is not None and closed.action.id == "buffer.next"
    assert len(list(registry.bindings("normal"))) == 2


def test_lookup_misses() -> None:
    registry = make_registry("buffer.new")
    registry.bind(Binding("normal", "n", "buffer.new", when="!popup_open"))

    assert registry.lookup("normal", "x") is None
    assert registry.lookup("insert", "n") is None
    assert registry.lookup("normal", "n", {"popup_open": True}) is None
    assert registry.lookup("normal", "n") is not None


def test_defaults_cover_every_mode() -> None:
    registry = defaults()

    assert registry.modes() == ("global", "insert", "navigate", "normal", "select")
    for letter, motion, _ in MOTION_KEYS:
        navigate = registry.lookup("navigate", letter)
        select = registry.lookup("select", letter)
        assert navigate is not None and navigate.action.id == f"navigate.{motion}"
        assert select is not None and select.action.id == f"select.{motion}"


def test_default_select_motions_extend_selection() -> None:
    registry = defaults()

    navigate = registry.lookup("navigate", "j")
    select = registry.lookup("select", "j")

    assert navigate is not None and select is not None
    assert navigate.action.handler.keywords.get("extend", False) is False
    assert select.action.handler.keywords["extend"] is True


def test_default_mode_switch_letters_follow_settings() -> None:
    settings = EditorSettings(
        mode_keys={"insert": "i", "navigate": "g", "select": "v", "normal": "x"}
    )
    registry = defaults(settings)

    match = registry.lookup("global", "ctrl+i")
    assert match is not None and match.action.id == "core.enter_insert"
    assert registry.lookup("global", "ctrl+e") is None
    quit_match = registry.lookup("global", "ESC")
    assert quit_match is not None and quit_match.action.id == "core.quit"


def test_default_normal_keys_are_gated_on_popup() -> None:
    registry = defaults()

    command = registry.lookup("normal", "n", {"popup_open": False})
    assert command is not None and command.action.id == "buffer.new"
    assert registry.lookup("normal", "n", {"popup_open": True}) is None

    commit = registry.lookup("normal", "ENTER", {"popup_open": True})
    assert commit is not None and commit.action.id == "popup.commit"
    assert registry.lookup("normal", "ENTER", {"popup_open": False}) is None


def test_default_rotation_uses_ctrl_arrows() -> None:
    registry = defaults()

    for mode in ("insert", "navigate"):
        previous = registry.lookup(mode, make_token("LEFT", ["ctrl"]))
        assert previous is not None and previous.action.id == "buffer.previous"
    plain = registry.lookup("insert", "LEFT")
    assert plain is not None and plain.action.id == "edit.left"
