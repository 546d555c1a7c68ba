"""Transition-by-transition tests for ScreenStateMachine."""

from pathlib import Path

import pytest

from application.task_store import TaskStore
from core import Task
from infrastructure.json_storage import JsonTaskStorage
from infrastructure.line_storage import LineTaskStorage
from interface import keys
from interface.keys import KeyEvent
from interface.screen_machine import (
    NOTHING_SELECTED,
    PLACEHOLDER_DESCRIPTION,
    KEYMAP,
    TRANSITIONS,
    Action,
    EditField,
    Screen,
    ScreenStateMachine,
    classify,
)

ENTER = KeyEvent(keys.ENTER)
ESC = KeyEvent(keys.ESC)
TAB = KeyEvent(keys.TAB)
UP = KeyEvent(keys.UP)
DOWN = KeyEvent(keys.DOWN)
LEFT = KeyEvent(keys.LEFT)
RIGHT = KeyEvent(keys.RIGHT)
BACKSPACE = KeyEvent(keys.BACKSPACE)
CTRL_C = KeyEvent.ctrl("c")


def press(machine, *events):
    for event in events:
        machine.handle(event if isinstance(event, KeyEvent) else KeyEvent.char(event))
    return machine.screen


def type_text(machine, text):
    for ch in text:
        machine.handle(KeyEvent.char(ch))


@pytest.fixture()
def machine(memory_store) -> ScreenStateMachine:
    for name in ("first", "second", "third"):
        memory_store.add(Task(0, name, f"{name} body"))
    return ScreenStateMachine(memory_store)


@pytest.fixture()
def empty_machine(memory_store) -> ScreenStateMachine:
    return ScreenStateMachine(memory_store)


class TestClassify:
    def test_q_quits_on_main_but_types_while_editing(self):
        assert classify(Screen.MAIN, KeyEvent.char("q")) is Action.QUIT
        assert classify(Screen.EDITING, KeyEvent.char("q")) is Action.CHAR

    def test_space_toggles_on_main_but_types_while_editing(self):
        assert classify(Screen.MAIN, KeyEvent.char(" ")) is Action.TOGGLE_DONE
        assert classify(Screen.EDITING, KeyEvent.char(" ")) is Action.CHAR

    def test_ctrl_c_is_quit_combo_everywhere(self):
        for screen in Screen:
            assert classify(screen, CTRL_C) is Action.QUIT_COMBO

    def test_other_ctrl_keys_ignored(self):
        assert classify(Screen.EDITING, KeyEvent.ctrl("a")) is None

    def test_unknown_key_on_main(self):
        assert classify(Screen.MAIN, KeyEvent.char("z")) is None

    def test_every_transition_has_a_key(self):
        reachable = {(screen, action) for screen, mapping in KEYMAP.items() for action in mapping.values()}
        reachable |= {(screen, Action.QUIT_COMBO) for screen in Screen}
        reachable.add((Screen.EDITING, Action.CHAR))
        assert set(TRANSITIONS) <= reachable


class TestMain:
    def test_initial_state(self, machine):
        assert machine.screen is Screen.MAIN
        assert machine.navigator.selected is None
        assert machine.quit_requested is False

    def test_quit_key_asks_for_confirmation(self, machine):
        assert press(machine, "q") is Screen.EXITING
        assert machine.quit_requested is False

    def test_down_and_up_wrap(self, machine):
        press(machine, DOWN)
        assert machine.navigator.selected == 0
        press(machine, UP)
        assert machine.navigator.selected == 2
        press(machine, DOWN)
        assert machine.navigator.selected == 0

    def test_left_clears_selection(self, machine):
        press(machine, DOWN, LEFT)
        assert machine.navigator.selected is None

    def test_enter_loads_description(self, machine):
        press(machine, DOWN, DOWN)
        assert press(machine, ENTER) is Screen.EDITING
        assert machine.editor.text == "second"
        assert machine.editor.cursor == len("second")
        assert machine.edit_field is EditField.DESCRIPTION
        assert machine.edit_index == 1

    def test_enter_without_selection_is_guarded(self, machine):
        assert press(machine, ENTER) is Screen.MAIN
        assert machine.current_status_message() == NOTHING_SELECTED

    def test_enter_on_empty_list_is_guarded(self, empty_machine):
        assert press(empty_machine, DOWN, ENTER) is Screen.MAIN
        assert empty_machine.navigator.selected is None

    def test_new_task_selects_and_edits(self, machine):
        assert press(machine, "a") is Screen.EDITING
        assert len(machine.store) == 4
        assert machine.store[3].description == PLACEHOLDER_DESCRIPTION
        assert machine.navigator.selected == 3
        assert machine.editor.text == PLACEHOLDER_DESCRIPTION
        assert machine.edit_index == 3

    def test_new_task_on_empty_store(self, empty_machine):
        press(empty_machine, "a")
        for _ in PLACEHOLDER_DESCRIPTION:
            press(empty_machine, BACKSPACE)
        type_text(empty_machine, "Buy milk")
        assert press(empty_machine, ENTER) is Screen.MAIN
        assert empty_machine.store.tasks_into_string() == "Buy milk [] \n"

    def test_toggle_done_persists(self, machine, fake_storage):
        press(machine, DOWN)
        press(machine, " ")
        assert machine.store[0].completed is True
        assert fake_storage.saved[0]["completed"] is True

    def test_toggle_hides_task_and_clamps_selection(self, machine):
        press(machine, DOWN, UP)
        assert machine.navigator.selected == 2
        press(machine, " ")
        assert [t.description for _, t in machine.visible_tasks()] == ["first", "second"]
        assert machine.navigator.selected == 1

    def test_toggle_without_selection(self, machine):
        press(machine, " ")
        assert not any(t.completed for t in machine.store.tasks)

    def test_delete_key_opens_confirmation(self, machine):
        press(machine, DOWN)
        assert press(machine, "x") is Screen.DELETING

    def test_delete_key_without_selection(self, machine):
        assert press(machine, "x") is Screen.MAIN

    def test_filter_toggle(self, machine):
        press(machine, DOWN, " ")
        assert len(machine.visible_tasks()) == 2
        press(machine, "h")
        assert machine.show_completed is True
        assert len(machine.visible_tasks()) == 3
        press(machine, "h")
        assert len(machine.visible_tasks()) == 2

    def test_filter_clamps_selection(self, machine):
        machine.store.toggle_completed(2)
        press(machine, "h", DOWN, UP)
        assert machine.navigator.selected == 2
        press(machine, "h")
        assert machine.navigator.selected == 1

    def test_help(self, machine):
        assert press(machine, "?") is Screen.HELP

    def test_unhandled_key_is_noop(self, machine):
        assert press(machine, "z", ESC, TAB) is Screen.MAIN


class TestEditing:
    def test_enter_commits_and_clears(self, machine, fake_storage):
        press(machine, DOWN, ENTER)
        type_text(machine, "!")
        assert press(machine, ENTER) is Screen.MAIN
        assert machine.store[0].description == "first!"
        assert fake_storage.saved[0]["description"] == "first!"
        assert machine.editor.text == ""

    def test_esc_discards(self, machine):
        press(machine, DOWN, ENTER)
        type_text(machine, "zzz")
        assert press(machine, ESC) is Screen.MAIN
        assert machine.store[0].description == "first"
        assert machine.editor.text == ""

    def test_tab_commits_and_switches_field(self, machine):
        press(machine, DOWN, ENTER)
        type_text(machine, "?")
        assert press(machine, TAB) is Screen.EDITING
        assert machine.store[0].description == "first?"
        assert machine.edit_field is EditField.BODY
        assert machine.editor.text == "first body"
        assert machine.editor.cursor == len("first body")
        type_text(machine, "!")
        press(machine, TAB)
        assert machine.store[0].body == "first body!"
        assert machine.edit_field is EditField.DESCRIPTION
        assert machine.editor.text == "first?"

    def test_empty_description_rejected_without_mutation(self, machine, fake_storage):
        press(machine, DOWN, ENTER)
        for _ in "first":
            press(machine, BACKSPACE)
        writes = fake_storage.writes
        assert press(machine, ENTER) is Screen.EDITING
        assert machine.store[0].description == "first"
        assert fake_storage.writes == writes
        assert machine.current_status_message().startswith("Rejected")
        assert press(machine, TAB) is Screen.EDITING
        assert machine.edit_field is EditField.DESCRIPTION

    def test_empty_body_is_allowed(self, machine):
        press(machine, DOWN, ENTER, TAB)
        for _ in "first body":
            press(machine, BACKSPACE)
        press(machine, ENTER)
        assert machine.store[0].body == ""

    def test_cursor_keys_and_multibyte_insert(self, machine):
        press(machine, DOWN, ENTER, LEFT, LEFT)
        type_text(machine, "é日")
        assert machine.editor.text == "firé日st"
        press(machine, RIGHT, BACKSPACE)
        assert machine.editor.text == "firé日t"
        press(machine, ENTER)
        assert machine.store[0].description == "firé日t"

    def test_typing_command_keys_inserts_them(self, machine):
        press(machine, DOWN, ENTER)
        type_text(machine, " qx?ah")
        assert machine.screen is Screen.EDITING
        assert machine.editor.text == "first qx?ah"

    def test_quit_combo_discards(self, machine):
        press(machine, DOWN, ENTER)
        type_text(machine, "zzz")
        assert press(machine, CTRL_C) is Screen.EXITING
        assert machine.editor.text == ""
        assert machine.store[0].description == "first"

    def test_persistence_failure_reported_and_edit_finishes(self, machine, fake_storage):
        press(machine, DOWN, ENTER)
        type_text(machine, "2")
        fake_storage.fail_writes = True
        assert press(machine, ENTER) is Screen.MAIN
        assert machine.store[0].description == "first2"
        assert machine.current_status_message().startswith("Not saved")


class TestHelpDeletingExiting:
    def test_help_closes_with_q_or_esc(self, machine):
        assert press(machine, "?", "q") is Screen.MAIN
        assert press(machine, "?", ESC) is Screen.MAIN

    def test_help_quit_combo(self, machine):
        assert press(machine, "?", CTRL_C) is Screen.EXITING

    def test_help_ignores_other_keys(self, machine):
        assert press(machine, "?", "a", DOWN) is Screen.HELP
        assert len(machine.store) == 3

    def test_delete_confirm_removes_selected(self, machine, fake_storage):
        press(machine, DOWN, DOWN, "x")
        assert press(machine, "y") is Screen.MAIN
        assert [t.description for t in machine.store.tasks] == ["first", "third"]
        assert [raw["description"] for raw in fake_storage.saved] == ["first", "third"]
        assert machine.navigator.selected == 1

    def test_delete_last_item_clears_selection(self, empty_machine):
        empty_machine.store.add(Task(0, "only"))
        press(empty_machine, DOWN, "x", "y")
        assert len(empty_machine.store) == 0
        assert empty_machine.navigator.selected is None

    def test_delete_deny(self, machine):
        press(machine, DOWN, "x")
        assert press(machine, "n") is Screen.MAIN
        press(machine, "x")
        assert press(machine, ESC) is Screen.MAIN
        assert len(machine.store) == 3

    def test_delete_respects_filter_mapping(self, machine):
        machine.store.toggle_completed(0)
        press(machine, DOWN, "x", "y")
        assert [t.description for t in machine.store.tasks] == ["first", "third"]

    def test_exit_confirm_sets_quit_flag(self, machine):
        press(machine, "q", "y")
        assert machine.quit_requested is True

    def test_exit_deny_and_esc(self, machine):
        assert press(machine, "q", "n") is Screen.MAIN
        assert press(machine, "q", ESC) is Screen.MAIN
        assert machine.quit_requested is False

    def test_main_ctrl_c_goes_to_exiting(self, machine):
        assert press(machine, CTRL_C) is Screen.EXITING

    def test_ctrl_c_on_delete_prompt_asks_to_quit(self, machine):
        press(machine, DOWN, "x")
        assert press(machine, CTRL_C) is Screen.EXITING
        assert len(machine.store) == 3
        assert machine.quit_requested is False

    def test_second_ctrl_c_confirms_quit(self, machine):
        press(machine, CTRL_C, CTRL_C)
        assert machine.quit_requested is True

    def test_ctrl_c_reaches_exit_from_every_screen(self, machine):
        press(machine, DOWN)
        for opener in ([], ["?"], [ENTER], ["x"], ["q"]):
            press(machine, ESC, *opener)
            press(machine, CTRL_C)
            assert machine.screen is Screen.EXITING


@pytest.mark.parametrize("storage_cls,name", [(LineTaskStorage, "user_data"), (JsonTaskStorage, "user_data.json")])
def test_full_session_survives_restart(tmp_path: Path, storage_cls, name):
    store = TaskStore(storage_cls(tmp_path / name))
    store.load()
    machine = ScreenStateMachine(store)
    press(machine, "a")
    for _ in PLACEHOLDER_DESCRIPTION:
        press(machine, BACKSPACE)
    type_text(machine, "Write, then ship")
    press(machine, TAB)
    type_text(machine, "by friday")
    press(machine, ENTER, " ")

    reloaded = TaskStore(storage_cls(tmp_path / name))
    reloaded.load()
    [task] = reloaded.tasks
    assert (task.description, task.body, task.completed) == ("Write, then ship", "by friday", True)
