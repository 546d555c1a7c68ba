"""Selection over the visible (filtered) task list."""

from typing import Callable, Optional


class ListNavigator:
    """Holds an optional index into a list it does not own.

    ``length`` reports the current size of the visible list. On an empty list
    movement clears the selection instead of failing.
    """

    def __init__(self, length: Callable[[], int]):
        self._length = length
        self.selected: Optional[int] = None

    def next(self) -> None:
        total = self._length()
        if total <= 0:
            self.selected = None
            return
        if self.selected is None or self.selected >= total - 1:
            self.selected = 0
        else:
            self.selected += 1

    def previous(self) -> None:
        total = self._length()
        if total <= 0:
            self.selected = None
            return
        if self.selected is None:
            self.selected = 0
        elif self.selected == 0 or self.selected > total - 1:
            self.selected = total - 1
        else:
            self.selected -= 1

    def select(self, index: int) -> None:
        total = self._length()
        if not 0 <= index < total:
            raise IndexError(f"selection {index} out of range (visible items: {total})")
        self.selected = index

    def clear_selection(self) -> None:
        self.selected = None

    def clamp(self) -> None:
        """Pull the selection back inside the list after it shrank."""
        if self.selected is None:
            return
        total = self._length()
        if total <= 0:
            self.selected = None
        elif self.selected >= total:
            self.selected = total - 1


__all__ = ["ListNavigator"]
