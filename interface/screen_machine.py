"""Screen state machine: maps key events to store/editor/navigator actions.

Dispatch is two-step. ``classify`` turns a raw ``KeyEvent`` into an
``Action`` for the current screen, then ``TRANSITIONS`` maps
``(screen, action)`` to a handler that performs the side effects and returns
the next screen. Pairs missing from the table are no-ops.
"""

import logging
import time
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

from application.task_store import EVENT_ADDED, TaskStore
from core import PersistenceError, Task, ValidationError
from interface import keys
from interface.keys import KeyEvent
from interface.list_navigator import ListNavigator
from interface.text_editor import TextEditor

logger = logging.getLogger("todo_tui.screen")

PLACEHOLDER_DESCRIPTION = "New task"
NOTHING_SELECTED = "No task selected"


class Screen(Enum):
    MAIN = "main"
    EDITING = "editing"
    DELETING = "deleting"
    HELP = "help"
    EXITING = "exiting"


class EditField(Enum):
    DESCRIPTION = "description"
    BODY = "body"

    def other(self) -> "EditField":
        return EditField.BODY if self is EditField.DESCRIPTION else EditField.DESCRIPTION


class Action(Enum):
    QUIT = "quit"
    QUIT_COMBO = "quit_combo"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    ENTER = "enter"
    NEW_TASK = "new_task"
    TOGGLE_DONE = "toggle_done"
    DELETE = "delete"
    FILTER = "filter"
    HELP = "help"
    ESC = "esc"
    TAB = "tab"
    CHAR = "char"
    BACKSPACE = "backspace"
    CONFIRM = "confirm"
    DENY = "deny"


MAIN_KEYS: Dict[str, Action] = {
    "q": Action.QUIT,
    keys.UP: Action.UP,
    "k": Action.UP,
    keys.DOWN: Action.DOWN,
    "j": Action.DOWN,
    keys.LEFT: Action.LEFT,
    keys.ENTER: Action.ENTER,
    "a": Action.NEW_TASK,
    keys.SPACE: Action.TOGGLE_DONE,
    "x": Action.DELETE,
    keys.DELETE: Action.DELETE,
    "h": Action.FILTER,
    "?": Action.HELP,
    keys.ESC: Action.ESC,
}

EDITING_KEYS: Dict[str, Action] = {
    keys.ENTER: Action.ENTER,
    keys.ESC: Action.ESC,
    keys.TAB: Action.TAB,
    keys.BACKSPACE: Action.BACKSPACE,
    keys.LEFT: Action.LEFT,
    keys.RIGHT: Action.RIGHT,
}

HELP_KEYS: Dict[str, Action] = {
    "q": Action.QUIT,
    keys.ESC: Action.ESC,
}

CONFIRM_KEYS: Dict[str, Action] = {
    "y": Action.CONFIRM,
    "Y": Action.CONFIRM,
    "n": Action.DENY,
    "N": Action.DENY,
    keys.ESC: Action.ESC,
}

KEYMAP: Dict[Screen, Dict[str, Action]] = {
    Screen.MAIN: MAIN_KEYS,
    Screen.EDITING: EDITING_KEYS,
    Screen.HELP: HELP_KEYS,
    Screen.DELETING: CONFIRM_KEYS,
    Screen.EXITING: CONFIRM_KEYS,
}


def classify(screen: Screen, event: KeyEvent) -> Optional[Action]:
    """Resolve a key event to the action it means on ``screen``."""
    if event.is_ctrl:
        return Action.QUIT_COMBO if event.code == "c" else None
    action = KEYMAP[screen].get(event.code)
    if action is not None:
        return action
    if screen is Screen.EDITING and event.printable is not None:
        return Action.CHAR
    return None


Handler = Callable[["ScreenStateMachine", KeyEvent], Screen]


class ScreenStateMachine:
    """Owns the current screen and interprets key events."""

    def __init__(self, store: TaskStore, *, status_ttl: float = 4.0):
        self.store = store
        self.screen = Screen.MAIN
        self.editor = TextEditor()
        self.navigator = ListNavigator(lambda: len(self.visible_tasks()))
        self.edit_field = EditField.DESCRIPTION
        self.edit_index: Optional[int] = None
        self.show_completed = False
        self.quit_requested = False
        self.status_message = ""
        self.status_message_expires = 0.0
        self.status_ttl = status_ttl
        store.subscribe(self._on_store_event)

    # ---- read-only state for the renderer ----

    def visible_tasks(self) -> List[Tuple[int, Task]]:
        return self.store.visible(self.show_completed)

    def selected_store_index(self) -> Optional[int]:
        """Store index behind the current selection, ``None`` when nothing is selected."""
        selected = self.navigator.selected
        if selected is None:
            return None
        visible = self.visible_tasks()
        if not 0 <= selected < len(visible):
            return None
        return visible[selected][0]

    def current_status_message(self, now: Optional[float] = None) -> str:
        ts = now if now is not None else time.time()
        if self.status_message and ts < self.status_message_expires:
            return self.status_message
        return ""

    def set_status_message(self, message: str, ttl: Optional[float] = None) -> None:
        self.status_message = message
        self.status_message_expires = time.time() + (self.status_ttl if ttl is None else ttl)

    # ---- dispatch ----

    def handle(self, event: KeyEvent) -> Screen:
        action = classify(self.screen, event)
        if action is None:
            return self.screen
        handler = TRANSITIONS.get((self.screen, action))
        if handler is None:
            return self.screen
        previous = self.screen
        self.screen = handler(self, event)
        if self.screen is not previous:
            logger.debug("screen %s -> %s via %s", previous.value, self.screen.value, action.value)
        return self.screen

    def _on_store_event(self, event: str) -> None:
        if event == EVENT_ADDED:
            self.navigator.clear_selection()
        else:
            self.navigator.clamp()

    def _report_persistence(self, exc: PersistenceError) -> None:
        logger.warning("Persistence failure: %s", exc)
        self.set_status_message(f"Not saved: {exc}", ttl=8.0)

    def _field_value(self, index: int, field: EditField) -> str:
        task = self.store[index]
        return task.description if field is EditField.DESCRIPTION else task.body

    def _commit(self) -> bool:
        """Write the buffer into the active field. False when the value was rejected."""
        if self.edit_index is None:
            return True
        text = self.editor.text
        try:
            if self.edit_field is EditField.DESCRIPTION:
                self.store.set_description(self.edit_index, text)
            else:
                self.store.set_body(self.edit_index, text)
        except ValidationError as exc:
            self.set_status_message(f"Rejected: {exc}")
            return False
        except PersistenceError as exc:
            self._report_persistence(exc)
        return True

    def _end_edit(self) -> None:
        self.editor.clear()
        self.edit_index = None
        self.edit_field = EditField.DESCRIPTION

    # ---- Main ----

    def _main_quit(self, event: KeyEvent) -> Screen:
        return Screen.EXITING

    def _main_up(self, event: KeyEvent) -> Screen:
        self.navigator.previous()
        return Screen.MAIN

    def _main_down(self, event: KeyEvent) -> Screen:
        self.navigator.next()
        return Screen.MAIN

    def _main_unselect(self, event: KeyEvent) -> Screen:
        self.navigator.clear_selection()
        return Screen.MAIN

    def _main_edit(self, event: KeyEvent) -> Screen:
        index = self.selected_store_index()
        if index is None:
            self.set_status_message(NOTHING_SELECTED)
            return Screen.MAIN
        self.edit_index = index
        self.edit_field = EditField.DESCRIPTION
        self.editor.load(self._field_value(index, self.edit_field))
        return Screen.EDITING

    def _main_new_task(self, event: KeyEvent) -> Screen:
        task = Task(0, PLACEHOLDER_DESCRIPTION)
        try:
            self.store.add(task)
        except PersistenceError as exc:
            self._report_persistence(exc)
        position = next(pos for pos, (idx, _) in enumerate(self.visible_tasks()) if self.store[idx] is task)
        self.navigator.select(position)
        self.edit_index = task.id
        self.edit_field = EditField.DESCRIPTION
        self.editor.load(task.description)
        return Screen.EDITING

    def _main_toggle_done(self, event: KeyEvent) -> Screen:
        index = self.selected_store_index()
        if index is None:
            self.set_status_message(NOTHING_SELECTED)
            return Screen.MAIN
        try:
            self.store.toggle_completed(index)
        except PersistenceError as exc:
            self._report_persistence(exc)
        self.navigator.clamp()
        return Screen.MAIN

    def _main_delete(self, event: KeyEvent) -> Screen:
        if self.selected_store_index() is None:
            self.set_status_message(NOTHING_SELECTED)
            return Screen.MAIN
        return Screen.DELETING

    def _main_filter(self, event: KeyEvent) -> Screen:
        self.show_completed = not self.show_completed
        self.navigator.clamp()
        return Screen.MAIN

    def _main_help(self, event: KeyEvent) -> Screen:
        return Screen.HELP

    # ---- Editing ----

    def _edit_save(self, event: KeyEvent) -> Screen:
        if not self._commit():
            return Screen.EDITING
        self._end_edit()
        return Screen.MAIN

    def _edit_cancel(self, event: KeyEvent) -> Screen:
        self._end_edit()
        return Screen.MAIN

    def _edit_switch_field(self, event: KeyEvent) -> Screen:
        if not self._commit():
            return Screen.EDITING
        if self.edit_index is not None:
            self.edit_field = self.edit_field.other()
            self.editor.load(self._field_value(self.edit_index, self.edit_field))
        return Screen.EDITING

    def _edit_insert(self, event: KeyEvent) -> Screen:
        self.editor.insert(event.code)
        return Screen.EDITING

    def _edit_backspace(self, event: KeyEvent) -> Screen:
        self.editor.delete_before_cursor()
        return Screen.EDITING

    def _edit_left(self, event: KeyEvent) -> Screen:
        self.editor.move_left()
        return Screen.EDITING

    def _edit_right(self, event: KeyEvent) -> Screen:
        self.editor.move_right()
        return Screen.EDITING

    def _edit_quit(self, event: KeyEvent) -> Screen:
        self._end_edit()
        return Screen.EXITING

    # ---- Help / Deleting / Exiting ----

    def _to_main(self, event: KeyEvent) -> Screen:
        return Screen.MAIN

    def _to_exiting(self, event: KeyEvent) -> Screen:
        return Screen.EXITING

    def _delete_confirm(self, event: KeyEvent) -> Screen:
        index = self.selected_store_index()
        if index is None:
            self.set_status_message(NOTHING_SELECTED)
            return Screen.MAIN
        try:
            removed = self.store.remove(index)
        except PersistenceError as exc:
            self._report_persistence(exc)
        else:
            self.set_status_message(f"Deleted: {removed.description}")
        self.navigator.clamp()
        return Screen.MAIN

    def _exit_confirm(self, event: KeyEvent) -> Screen:
        self.quit_requested = True
        return Screen.EXITING


TRANSITIONS: Dict[Tuple[Screen, Action], Handler] = {
    (Screen.MAIN, Action.QUIT): ScreenStateMachine._main_quit,
    (Screen.MAIN, Action.QUIT_COMBO): ScreenStateMachine._main_quit,
    (Screen.MAIN, Action.UP): ScreenStateMachine._main_up,
    (Screen.MAIN, Action.DOWN): ScreenStateMachine._main_down,
    (Screen.MAIN, Action.LEFT): ScreenStateMachine._main_unselect,
    (Screen.MAIN, Action.ENTER): ScreenStateMachine._main_edit,
    (Screen.MAIN, Action.NEW_TASK): ScreenStateMachine._main_new_task,
    (Screen.MAIN, Action.TOGGLE_DONE): ScreenStateMachine._main_toggle_done,
    (Screen.MAIN, Action.DELETE): ScreenStateMachine._main_delete,
    (Screen.MAIN, Action.FILTER): ScreenStateMachine._main_filter,
    (Screen.MAIN, Action.HELP): ScreenStateMachine._main_help,
    (Screen.EDITING, Action.ENTER): ScreenStateMachine._edit_save,
    (Screen.EDITING, Action.ESC): ScreenStateMachine._edit_cancel,
    (Screen.EDITING, Action.TAB): ScreenStateMachine._edit_switch_field,
    (Screen.EDITING, Action.CHAR): ScreenStateMachine._edit_insert,
    (Screen.EDITING, Action.BACKSPACE): ScreenStateMachine._edit_backspace,
    (Screen.EDITING, Action.LEFT): ScreenStateMachine._edit_left,
    (Screen.EDITING, Action.RIGHT): ScreenStateMachine._edit_right,
    (Screen.EDITING, Action.QUIT_COMBO): ScreenStateMachine._edit_quit,
    (Screen.HELP, Action.QUIT): ScreenStateMachine._to_main,
    (Screen.HELP, Action.ESC): ScreenStateMachine._to_main,
    (Screen.HELP, Action.QUIT_COMBO): ScreenStateMachine._to_exiting,
    (Screen.DELETING, Action.CONFIRM): ScreenStateMachine._delete_confirm,
    (Screen.DELETING, Action.DENY): ScreenStateMachine._to_main,
    (Screen.DELETING, Action.ESC): ScreenStateMachine._to_main,
    (Screen.DELETING, Action.QUIT_COMBO): ScreenStateMachine._to_exiting,
    (Screen.EXITING, Action.CONFIRM): ScreenStateMachine._exit_confirm,
    (Screen.EXITING, Action.DENY): ScreenStateMachine._to_main,
    (Screen.EXITING, Action.ESC): ScreenStateMachine._to_main,
    (Screen.EXITING, Action.QUIT_COMBO): ScreenStateMachine._exit_confirm,
}


__all__ = [
    "Screen",
    "EditField",
    "Action",
    "ScreenStateMachine",
    "TRANSITIONS",
    "KEYMAP",
    "classify",
    "PLACEHOLDER_DESCRIPTION",
    "NOTHING_SELECTED",
]
