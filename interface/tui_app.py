#!/usr/bin/env python3
"""TUI application - TodoTUI class and cmd_tui command."""

import logging
import os
import shutil
import time
from typing import Optional

from prompt_toolkit.application import Application
from prompt_toolkit.filters import Condition
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.keys import Keys
from prompt_toolkit.layout import HSplit, Layout, Window
from prompt_toolkit.layout.containers import ConditionalContainer
from prompt_toolkit.layout.controls import FormattedTextControl
from prompt_toolkit.layout.dimension import Dimension

from application.task_store import TaskStore
from interface.keys import from_key_press
from interface.screen_machine import Screen, ScreenStateMachine
from interface.tui_render import (
    build_footer_text,
    build_help_text,
    build_status_text,
    build_task_list_text,
)
from interface.tui_themes import DEFAULT_THEME, build_style

logger = logging.getLogger("todo_tui.app")

DEFAULT_TICK_INTERVAL = 0.25


class TodoTUI:
    """Event loop around the screen state machine.

    prompt_toolkit redraws every ``tick_interval`` seconds; each redraw that
    crosses a tick boundary advances the spinner counter. Every key press is
    forwarded to the state machine, and the app exits once the machine raises
    its quit flag.
    """

    def __init__(
        self,
        store: TaskStore,
        theme: str = DEFAULT_THEME,
        tick_interval: float = DEFAULT_TICK_INTERVAL,
        *,
        input=None,
        output=None,
    ):
        self.store = store
        self.machine = ScreenStateMachine(store)
        self.tick_interval = max(0.01, float(tick_interval))
        self.tick = 0
        self._last_tick = time.monotonic()
        self.style = build_style(theme)

        kb = KeyBindings()
        kb.timeout = 0

        @kb.add(Keys.Any, eager=True)
        @kb.add("escape", eager=True)
        @kb.add("enter", eager=True)
        @kb.add("tab", eager=True)
        @kb.add("backspace", eager=True)
        @kb.add("delete", eager=True)
        @kb.add("up", eager=True)
        @kb.add("down", eager=True)
        @kb.add("left", eager=True)
        @kb.add("right", eager=True)
        @kb.add("c-c", eager=True)
        def _(event):
            for press in event.key_sequence:
                self.dispatch(press)
            if self.machine.quit_requested:
                event.app.exit()

        help_visible = Condition(lambda: self.machine.screen is Screen.HELP)
        list_visible = ~help_visible

        self.status_bar = Window(
            content=FormattedTextControl(lambda: build_status_text(self.machine, self.tick)),
            height=1,
            always_hide_cursor=True,
        )
        self.main_window = Window(
            content=FormattedTextControl(lambda: build_task_list_text(self.machine, self.get_terminal_width())),
            always_hide_cursor=True,
            wrap_lines=False,
        )
        self.help_window = Window(content=FormattedTextControl(build_help_text), always_hide_cursor=True)
        self.footer = Window(
            content=FormattedTextControl(lambda: build_footer_text(self.machine)),
            height=Dimension(min=2, max=2),
            always_hide_cursor=True,
        )
        root = HSplit(
            [
                self.status_bar,
                Window(height=1, char="─", style="class:border"),
                ConditionalContainer(self.main_window, filter=list_visible),
                ConditionalContainer(self.help_window, filter=help_visible),
                Window(height=1, char="─", style="class:border"),
                self.footer,
            ]
        )

        self.app = Application(
            layout=Layout(root),
            key_bindings=kb,
            style=self.style,
            full_screen=True,
            refresh_interval=self.tick_interval,
            input=input,
            output=output,
        )
        self.app.before_render += self._on_before_render
        try:
            self.app.ttimeoutlen = max(0.0, float(os.getenv("TODO_TUI_TTIMEOUTLEN", "0.05")))
        except ValueError:
            self.app.ttimeoutlen = 0.05

    @staticmethod
    def get_terminal_width() -> int:
        """Get current terminal width, default to 80 if unavailable."""
        return shutil.get_terminal_size((80, 24)).columns

    def dispatch(self, press) -> Optional[Screen]:
        event = from_key_press(press)
        if event is None:
            return None
        return self.machine.handle(event)

    def on_tick(self, now: Optional[float] = None) -> bool:
        """Advance the animation counter if a tick boundary passed."""
        ts = now if now is not None else time.monotonic()
        if ts - self._last_tick < self.tick_interval:
            return False
        self.tick += 1
        self._last_tick = ts
        return True

    def _on_before_render(self, _app) -> None:
        self.on_tick()

    def run(self) -> None:
        logger.info("TUI started with %d tasks", len(self.store))
        self.app.run()
        logger.info("TUI stopped")


def cmd_tui(args) -> int:
    tui = TodoTUI(
        store=args.store,
        theme=getattr(args, "theme", DEFAULT_THEME),
        tick_interval=getattr(args, "tick_interval", DEFAULT_TICK_INTERVAL),
    )
    tui.run()
    return 0


__all__ = ["TodoTUI", "cmd_tui", "DEFAULT_TICK_INTERVAL"]
