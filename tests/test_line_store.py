from __future__ import annotations

import pytest

from modedit.buffer import LineIndexError, LineStore


def test_from_text_strips_terminators() -> None:
    store = LineStore.from_text("alpha\r\nbeta\ngamma\n")

    assert store.snapshot() == ("alpha", "beta", "gamma")


def test_from_text_without_final_terminator() -> None:
    store = LineStore.from_text("one\ntwo")

    assert store.num_lines == 2
    assert store.line_at(1) == "two"


def test_empty_text_is_one_empty_line() -> None:
    store = LineStore.from_text("")

    assert store.snapshot() == ("",)


def test_blank_lines_are_kept() -> None:
    store = LineStore.from_text("a\n\n\nb\n")

    assert store.snapshot() == ("a", "", "", "b")


def test_to_text_appends_terminator_per_line() -> None:
    store = LineStore.from_lines(["a", "b"])

    assert store.to_text() == "a\nb\n"
    assert store.to_text(trailing_newline=False) == "a\nb"


def test_line_queries_out_of_range_return_none() -> None:
    store = LineStore.from_lines(["héllo"])

    assert store.char_at(0, 1) == "é"
    assert store.char_at(0, 5) is None
    assert store.char_at(3, 0) is None
    assert store.line_char_length(0) == 5
    assert store.line_char_length(1) is None
    assert store.line_at(-1) is None


def test_set_line_at_reports_range() -> None:
    store = LineStore.from_lines(["a"])

    assert store.set_line_at(0, "b") is True
    assert store.set_line_at(4, "c") is False
    assert store.snapshot() == ("b",)


def test_insert_line_past_end_appends() -> None:
    store = LineStore.from_lines(["a"])

    store.insert_line_at(10, "z")
    store.insert_line_at(0, "first")

    assert store.snapshot() == ("first", "a", "z")


def test_remove_line_out_of_range_raises() -> None:
    store = LineStore.from_lines(["a", "b"])

    assert store.remove_line_at(0) == "a"
    with pytest.raises(LineIndexError):
        store.remove_line_at(5)
    with pytest.raises(IndexError):
        store.remove_line_at(-1)


def test_remove_last_line_leaves_empty_store() -> None:
    store = LineStore.from_lines(["only"])

    store.remove_line_at(0)

    assert store.num_lines == 0
    assert list(store) == []


def test_break_line_splits_at_position() -> None:
    store = LineStore.from_lines(["helloworld"])

    store.break_line_at(0, 5)

    assert store.snapshot() == ("hello", "world")


def test_break_line_at_end_adds_empty_line() -> None:
    store = LineStore.from_lines(["abc"])

    store.break_line_at(0, 3)

    assert store.snapshot() == ("abc", "")


def test_merge_lines_joins_adjacent() -> None:
    store = LineStore.from_lines(["ab", "cd", "ef"])

    store.merge_lines(0, 1)

    assert store.snapshot() == ("abcd", "ef")


def test_break_then_merge_restores_every_split_point() -> None:
    word = "héllo"

    for position in range(len(word) + 1):
        store = LineStore.from_lines([word, "tail"])

        store.break_line_at(0, position)
        assert store.snapshot() == (word[:position], word[position:], "tail")

        store.merge_lines(0, 1)
        assert store.snapshot() == (word, "tail")


def test_break_counts_characters_not_bytes() -> None:
    store = LineStore.from_lines(["héllo"])

    store.break_line_at(0, 2)

    assert store.snapshot() == ("hé", "llo")
    assert store.line_char_length(0) == 2


def test_break_at_zero_leaves_empty_prefix() -> None:
    store = LineStore.from_lines(["héllo"])

    store.break_line_at(0, 0)

    assert store.snapshot() == ("", "héllo")


def test_merge_lines_rejects_non_adjacent() -> None:
    store = LineStore.from_lines(["ab", "cd", "ef"])

    with pytest.raises(ValueError):
        store.merge_lines(0, 2)
    with pytest.raises(LineIndexError):
        store.merge_lines(2, 3)
