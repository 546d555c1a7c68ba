"""Ordered task collection kept in lockstep with its storage."""

import logging
from typing import Callable, Iterator, List, Tuple

from application.ports import TaskStorage
from core import PersistenceError, Task, ValidationError

logger = logging.getLogger("todo_tui.store")

StoreListener = Callable[[str], None]

EVENT_ADDED = "added"
EVENT_REMOVED = "removed"
EVENT_CLEARED = "cleared"


class TaskStore:
    """Owns the task sequence and persists it after every mutation.

    Writes are synchronous and unbuffered. When a write fails the mutation
    stays applied in memory and ``PersistenceError`` propagates to the caller.
    """

    def __init__(self, storage: TaskStorage):
        self._storage = storage
        self._tasks: List[Task] = []
        self._listeners: List[StoreListener] = []

    @property
    def storage(self) -> TaskStorage:
        return self._storage

    @property
    def tasks(self) -> Tuple[Task, ...]:
        return tuple(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(tuple(self._tasks))

    def __getitem__(self, index: int) -> Task:
        return self._tasks[index]

    def subscribe(self, listener: StoreListener) -> None:
        self._listeners.append(listener)

    def _notify(self, event: str) -> None:
        for listener in list(self._listeners):
            listener(event)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._tasks):
            raise IndexError(f"task index {index} out of range (0..{len(self._tasks) - 1})")

    # ---- persistence ----

    def load(self) -> None:
        """Replace the in-memory sequence with what the storage holds."""
        self._tasks = list(self._storage.read_all())
        logger.info("Store loaded %d tasks from %s", len(self._tasks), self._storage.path)

    def persist(self) -> None:
        try:
            self._storage.write_all(self._tasks)
        except PersistenceError as exc:
            logger.warning("Persist failed, saved state lags memory: %s", exc)
            raise

    # ---- mutations ----

    def add(self, task: Task) -> None:
        self._storage.validate_field("description", task.description)
        self._storage.validate_field("body", task.body)
        task.id = len(self._tasks)
        self._tasks.append(task)
        try:
            self.persist()
        finally:
            self._notify(EVENT_ADDED)
        logger.debug("Task added id=%s", task.id)

    def remove(self, index: int) -> Task:
        self._check_index(index)
        task = self._tasks.pop(index)
        try:
            self.persist()
        finally:
            self._notify(EVENT_REMOVED)
        logger.debug("Task removed index=%s", index)
        return task

    def clear(self) -> None:
        self._tasks = []
        try:
            self._storage.reset()
        except PersistenceError as exc:
            logger.warning("Clear failed, saved state lags memory: %s", exc)
            raise
        finally:
            self._notify(EVENT_CLEARED)

    def set_description(self, index: int, text: str) -> None:
        self._check_index(index)
        if not text:
            raise ValidationError("description is empty")
        self._storage.validate_field("description", text)
        self._tasks[index].change_text(text)
        self.persist()

    def set_body(self, index: int, text: str) -> None:
        self._check_index(index)
        self._storage.validate_field("body", text)
        self._tasks[index].set_body(text)
        self.persist()

    def toggle_completed(self, index: int) -> None:
        self._check_index(index)
        self._tasks[index].toggle_completed()
        self.persist()

    # ---- views ----

    def visible(self, show_completed: bool) -> List[Tuple[int, Task]]:
        """``(store_index, task)`` pairs left after the completed-task filter."""
        return [(idx, t) for idx, t in enumerate(self._tasks) if show_completed or not t.completed]

    def tasks_into_string(self) -> str:
        return "".join(t.render_legacy() for t in self._tasks)


__all__ = ["TaskStore", "StoreListener", "EVENT_ADDED", "EVENT_REMOVED", "EVENT_CLEARED"]
