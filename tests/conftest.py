from __future__ import annotations

from pathlib import Path
from typing import List, Sequence

import pytest

from application.task_store import TaskStore
from core import PersistenceError, Task
from infrastructure.json_storage import JsonTaskStorage
from infrastructure.line_storage import LineTaskStorage


class FakeStorage:
    """In-memory storage double. Set ``fail_writes`` to simulate a full disk."""

    def __init__(self, tasks: Sequence[Task] = ()):
        self.path = Path("memory://tasks")
        self.saved: List[dict] = [t.to_dict() for t in tasks]
        self.writes = 0
        self.fail_writes = False

    def read_all(self) -> List[Task]:
        out = []
        for raw in self.saved:
            task = Task(raw["id"], raw["description"], raw["body"])
            task.completed = raw["completed"]
            out.append(task)
        return out

    def write_all(self, tasks: Sequence[Task]) -> None:
        if self.fail_writes:
            raise PersistenceError("Cannot write task file", self.path, OSError(28, "No space left on device"))
        self.writes += 1
        self.saved = [t.to_dict() for t in tasks]

    def reset(self) -> None:
        self.write_all([])

    def validate_field(self, field: str, value: str) -> None:
        return


@pytest.fixture()
def fake_storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture()
def memory_store(fake_storage: FakeStorage) -> TaskStore:
    store = TaskStore(fake_storage)
    store.load()
    return store


@pytest.fixture(params=["lines", "json"])
def file_storage(request, tmp_path: Path):
    """Both real backends, each writing into its own tmp file."""
    if request.param == "lines":
        return LineTaskStorage(tmp_path / "user_data")
    return JsonTaskStorage(tmp_path / "user_data.json")
