"""Unit tests for the character-cursor text editor."""

import pytest

from interface.text_editor import TextEditor


def test_load_places_cursor_at_end():
    editor = TextEditor()
    editor.load("héllo")
    assert editor.cursor == 5


def test_insert_advances_cursor():
    editor = TextEditor()
    for ch in "abc":
        editor.insert(ch)
    assert editor.text == "abc"
    assert editor.cursor == 3


def test_insert_in_middle_of_multibyte_text():
    editor = TextEditor("日本語")
    editor.move_left()
    editor.insert("の")
    assert editor.text == "日本の語"
    assert editor.cursor == 3


def test_insert_emoji_and_delete_it():
    editor = TextEditor("a")
    editor.insert("🚀")
    editor.insert("b")
    assert editor.text == "a🚀b"
    editor.move_left()
    editor.delete_before_cursor()
    assert editor.text == "ab"
    assert editor.cursor == 1


def test_delete_before_cursor_at_start_is_noop():
    editor = TextEditor("ñ")
    editor.move_left()
    editor.delete_before_cursor()
    assert editor.text == "ñ"
    assert editor.cursor == 0


def test_moves_saturate():
    editor = TextEditor("ab")
    editor.move_right()
    assert editor.cursor == 2
    for _ in range(5):
        editor.move_left()
    assert editor.cursor == 0


def test_cursor_always_within_bounds_after_mixed_ops():
    editor = TextEditor()
    for ch in "ẞüß€😀":
        editor.insert(ch)
        editor.move_left()
        editor.move_right()
    for _ in range(10):
        editor.delete_before_cursor()
        assert 0 <= editor.cursor <= len(editor.text)
    assert editor.text == ""


def test_out_of_range_cursor_is_clamped_before_insert():
    editor = TextEditor("ab")
    editor.cursor = 10
    editor.insert("c")
    assert editor.text == "abc"
    assert editor.cursor == 3


def test_insert_requires_single_character():
    editor = TextEditor()
    with pytest.raises(ValueError):
        editor.insert("ab")
    with pytest.raises(ValueError):
        editor.insert("")


def test_clear_resets_cursor():
    editor = TextEditor("xyz")
    editor.clear()
    assert (editor.text, editor.cursor) == ("", 0)
