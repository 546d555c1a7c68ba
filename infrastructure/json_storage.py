"""JSON array task file (current backend)."""

import json
import logging
from pathlib import Path
from typing import Any, List, Sequence

from core import ParseError, PersistenceError, Task, ValidationError

logger = logging.getLogger("todo_tui.storage")

_FIELDS = (("id", int), ("description", str), ("completed", bool), ("body", str))


def task_from_dict(raw: Any, position: int) -> Task:
    if not isinstance(raw, dict):
        raise ParseError(f"record #{position} is not an object")
    for key, kind in _FIELDS:
        if key not in raw:
            raise ParseError(f"record #{position} has no {key!r}")
        value = raw[key]
        # bool is a subclass of int; ids must be real integers
        if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
            raise ParseError(f"record #{position}: {key!r} must be {kind.__name__}")
    try:
        task = Task(raw["id"], raw["description"], raw["body"])
    except ValidationError as exc:
        raise ParseError(f"record #{position}: {exc}") from exc
    task.completed = raw["completed"]
    return task


class JsonTaskStorage:
    def __init__(self, path: Path):
        self.path = Path(path)

    def read_all(self) -> List[Task]:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.info("Task file %s missing, creating it", self.path)
            self.reset()
            return []
        except UnicodeDecodeError as exc:
            raise ParseError(f"file is not valid UTF-8: {exc.reason}") from exc
        except OSError as exc:
            raise PersistenceError("Cannot read task file", self.path, exc) from exc
        if not text.strip():
            return []
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ParseError(f"invalid JSON: {exc.msg}", exc.lineno) from exc
        if not isinstance(payload, list):
            raise ParseError("top-level value must be an array")
        tasks = [task_from_dict(raw, pos) for pos, raw in enumerate(payload)]
        logger.debug("Loaded %d tasks from %s", len(tasks), self.path)
        return tasks

    def write_all(self, tasks: Sequence[Task]) -> None:
        content = json.dumps([t.to_dict() for t in tasks], indent=2, ensure_ascii=False)
        try:
            data = (content + "\n").encode("utf-8")
        except UnicodeEncodeError as exc:
            raise PersistenceError("Cannot encode task file", self.path, exc) from exc
        try:
            self.path.write_bytes(data)
        except OSError as exc:
            raise PersistenceError("Cannot write task file", self.path, exc) from exc

    def reset(self) -> None:
        self.write_all([])

    def validate_field(self, field: str, value: str) -> None:
        return
