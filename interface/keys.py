"""Raw key events and their adapter from prompt_toolkit key presses."""

from dataclasses import dataclass, field
from typing import FrozenSet, Optional

from prompt_toolkit.key_binding.key_processor import KeyPress
from prompt_toolkit.keys import Keys

CTRL = "ctrl"
SHIFT = "shift"

UP = "up"
DOWN = "down"
LEFT = "left"
RIGHT = "right"
ENTER = "enter"
ESC = "escape"
TAB = "tab"
BACKSPACE = "backspace"
DELETE = "delete"
SPACE = " "


@dataclass(frozen=True)
class KeyEvent:
    """Key code plus modifier set.

    ``code`` is either a single printable character or one of the named keys
    above.
    """

    code: str
    modifiers: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def char(cls, ch: str) -> "KeyEvent":
        return cls(ch)

    @classmethod
    def ctrl(cls, ch: str) -> "KeyEvent":
        return cls(ch.lower(), frozenset({CTRL}))

    @property
    def is_ctrl(self) -> bool:
        return CTRL in self.modifiers

    @property
    def printable(self) -> Optional[str]:
        if self.modifiers - {SHIFT}:
            return None
        if len(self.code) == 1 and self.code.isprintable():
            return self.code
        return None


_NAMED = {
    Keys.Up: UP,
    Keys.Down: DOWN,
    Keys.Left: LEFT,
    Keys.Right: RIGHT,
    Keys.ControlM: ENTER,
    Keys.ControlJ: ENTER,
    Keys.Escape: ESC,
    Keys.ControlI: TAB,
    Keys.ControlH: BACKSPACE,
    Keys.Backspace: BACKSPACE,
    Keys.Delete: DELETE,
}


def from_key_press(press: KeyPress) -> Optional[KeyEvent]:
    """Translate a prompt_toolkit ``KeyPress`` into a ``KeyEvent``."""
    key = press.key
    if key in _NAMED:
        return KeyEvent(_NAMED[key])
    if key == Keys.BackTab:
        return KeyEvent(TAB, frozenset({SHIFT}))
    name = str(getattr(key, "value", key))
    if name.startswith("c-") and len(name) == 3:
        return KeyEvent.ctrl(name[2])
    data = press.data or ""
    if len(data) == 1 and data.isprintable():
        return KeyEvent.char(data)
    return None


__all__ = [
    "KeyEvent",
    "from_key_press",
    "CTRL",
    "SHIFT",
    "UP",
    "DOWN",
    "LEFT",
    "RIGHT",
    "ENTER",
    "ESC",
    "TAB",
    "BACKSPACE",
    "DELETE",
    "SPACE",
]
