"""Frame builders for the task list TUI.

Pure presentation: every function reads the state machine and returns
prompt_toolkit fragments, nothing here mutates state.
"""

from typing import List, Tuple

from prompt_toolkit.formatted_text import FormattedText
from wcwidth import wcswidth, wcwidth

from interface.screen_machine import EditField, Screen, ScreenStateMachine

Fragments = List[Tuple[str, str]]

SPINNER_FRAMES: List[str] = ["⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏"]
HIGHLIGHT = ">> "
KEY_HINTS: List[Tuple[str, str]] = [
    ("a", "New"),
    ("Enter", "Edit"),
    ("Space", "Done"),
    ("x", "Delete"),
    ("h", "Show/Hide done"),
    ("?", "Help"),
    ("q", "Quit"),
]
HELP_LINES: List[Tuple[str, str]] = [
    ("↑/↓ k/j", "move selection (wraps around)"),
    ("←", "clear selection"),
    ("a", "add a task and edit it"),
    ("Enter", "edit the selected task"),
    ("Tab", "while editing: switch description / body"),
    ("Esc", "while editing: discard changes"),
    ("Space", "mark selected task done / not done"),
    ("x, Delete", "delete selected task"),
    ("h", "show or hide completed tasks"),
    ("Ctrl+C", "quit from anywhere (again to confirm)"),
]


def display_width(text: str) -> int:
    width = wcswidth(text)
    if width < 0:
        return sum(max(wcwidth(ch), 0) for ch in text)
    return width


def trim_display(text: str, width: int) -> str:
    if display_width(text) <= width:
        return text
    out = ""
    for ch in text:
        if display_width(out + ch + "…") > width:
            break
        out += ch
    return out + "…"


def spinner_frame(tick: int) -> str:
    return SPINNER_FRAMES[tick % len(SPINNER_FRAMES)]


def build_status_text(machine: ScreenStateMachine, tick: int = 0) -> FormattedText:
    total = len(machine.store)
    done = sum(1 for t in machine.store.tasks if t.completed)
    flt = "all tasks" if machine.show_completed else "pending only"
    parts: Fragments = [
        ("class:spinner", f" {spinner_frame(tick)} "),
        ("class:header", "Tasks"),
        ("class:text.dim", f" | {done}/{total} done | "),
        ("class:header", flt),
    ]
    message = machine.current_status_message()
    if message:
        parts.extend([("class:text.dim", " | "), ("class:dialog", message[:80])])
    return FormattedText(parts)


def build_task_list_text(machine: ScreenStateMachine, width: int = 80) -> FormattedText:
    visible = machine.visible_tasks()
    if not visible:
        return FormattedText([("class:text.dim", "  No tasks. Press 'a' to add one.\n")])
    selected = machine.navigator.selected
    parts: Fragments = []
    for pos, (_, task) in enumerate(visible):
        is_selected = pos == selected
        prefix = HIGHLIGHT if is_selected else " " * len(HIGHLIGHT)
        mark = "[x]" if task.completed else "[ ]"
        style = "class:selected" if is_selected else "class:text"
        mark_style = "class:selected.ok" if is_selected and task.completed else (
            "class:status.ok" if task.completed else style
        )
        room = max(8, width - len(prefix) - len(mark) - 2)
        parts.append((style, prefix))
        parts.append((mark_style, mark))
        parts.append((style, " " + trim_display(task.description, room)))
        parts.append(("", "\n"))
        if task.body:
            parts.append(("class:text.body", " " * (len(prefix) + 4) + trim_display(task.body, room) + "\n"))
    return FormattedText(parts)


def build_editor_text(machine: ScreenStateMachine) -> FormattedText:
    label = "Description" if machine.edit_field is EditField.DESCRIPTION else "Body"
    editor = machine.editor
    before = editor.text[: editor.cursor]
    at = editor.text[editor.cursor : editor.cursor + 1] or " "
    after = editor.text[editor.cursor + 1 :]
    return FormattedText(
        [
            ("class:editor.label", f" {label}: "),
            ("class:editor", before),
            ("class:editor reverse", at),
            ("class:editor", after),
            ("", "\n"),
            ("class:text.dim", " Enter save · Tab switch field · Esc discard"),
        ]
    )


def build_dialog_text(machine: ScreenStateMachine) -> FormattedText:
    if machine.screen is Screen.DELETING:
        index = machine.selected_store_index()
        name = machine.store[index].description if index is not None else "?"
        question = f" Delete '{trim_display(name, 40)}'? "
    elif machine.screen is Screen.EXITING:
        question = " Quit? "
    else:
        return FormattedText([])
    return FormattedText(
        [
            ("class:dialog", question),
            ("class:key", "y"),
            ("class:text.dim", "/"),
            ("class:key", "n"),
        ]
    )


def build_help_text() -> FormattedText:
    parts: Fragments = [("class:header", " Keys\n\n")]
    for key, text in HELP_LINES:
        parts.append(("class:key", f"  {key:<12}"))
        parts.append(("class:text", f"{text}\n"))
    parts.append(("class:text.dim", "\n  q / Esc to close"))
    return FormattedText(parts)


def build_footer_text(machine: ScreenStateMachine) -> FormattedText:
    if machine.screen is Screen.EDITING:
        return build_editor_text(machine)
    if machine.screen in (Screen.DELETING, Screen.EXITING):
        return build_dialog_text(machine)
    parts: Fragments = []
    for key, label in KEY_HINTS:
        parts.append(("class:text", f" {label} "))
        parts.append(("class:key", f"<{key}>"))
    return FormattedText(parts)


__all__ = [
    "build_status_text",
    "build_task_list_text",
    "build_editor_text",
    "build_dialog_text",
    "build_help_text",
    "build_footer_text",
    "display_width",
    "trim_display",
    "spinner_frame",
]
