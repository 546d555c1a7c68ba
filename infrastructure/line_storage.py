"""Line-encoded task file (legacy backend).

One record per line: ``id,description,completed`` (legacy, 3 fields) or
``id,description,completed,body`` (current, 4 fields). Nothing is escaped:
``description`` may contain commas because the trailing fields are split
right-to-left, ``body`` may not.
"""

import logging
from pathlib import Path
from typing import List, Optional, Sequence

from core import ParseError, PersistenceError, Task, ValidationError

logger = logging.getLogger("todo_tui.storage")

_BOOLS = {"true": True, "false": False}


def _parse_bool(token: str, line_no: int) -> bool:
    try:
        return _BOOLS[token]
    except KeyError:
        raise ParseError(f"invalid completed flag {token!r}", line_no) from None


def parse_line(line: str, line_no: int = 1) -> Task:
    """Decode one record. Arity (3 vs 4 fields) decides the shape."""
    head, sep, rest = line.partition(",")
    if not sep:
        raise ParseError("expected 3 or 4 comma separated fields", line_no)
    try:
        task_id = int(head)
    except ValueError:
        raise ParseError(f"invalid id {head!r}", line_no) from None
    if task_id < 0:
        raise ParseError(f"invalid id {head!r}", line_no)

    parts = rest.rsplit(",", 2)
    if len(parts) == 3 and parts[1] in _BOOLS:
        description, flag, body = parts
    elif len(parts) >= 2:
        description, flag = rest.rsplit(",", 1)
        body = ""
    else:
        raise ParseError("expected 3 or 4 comma separated fields", line_no)
    completed = _parse_bool(flag, line_no)
    try:
        task = Task(task_id, description, body)
    except ValidationError as exc:
        raise ParseError(str(exc), line_no) from exc
    task.completed = completed
    return task


def split_records(text: str) -> List[str]:
    """Split on ``\\n`` only, dropping one ``\\r`` per line and the empty tail.

    ``str.splitlines`` also breaks on U+2028, form feeds and friends, which
    are legal inside a field.
    """
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


class LineTaskStorage:
    def __init__(self, path: Path):
        self.path = Path(path)

    def _read_text(self) -> Optional[str]:
        try:
            return self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except UnicodeDecodeError as exc:
            raise ParseError(f"file is not valid UTF-8: {exc.reason}") from exc
        except OSError as exc:
            raise PersistenceError("Cannot read task file", self.path, exc) from exc

    def _write_lines(self, lines: Sequence[str]) -> None:
        # encode up front so an unencodable field never truncates the file
        try:
            encoded = [(line + "\n").encode("utf-8") for line in lines]
        except UnicodeEncodeError as exc:
            raise PersistenceError("Cannot encode task file", self.path, exc) from exc
        try:
            with open(self.path, "wb") as fh:
                for chunk in encoded:
                    fh.write(chunk)
        except OSError as exc:
            raise PersistenceError("Cannot write task file", self.path, exc) from exc

    def read_all(self) -> List[Task]:
        text = self._read_text()
        if text is None:
            logger.info("Task file %s missing, creating it", self.path)
            self.reset()
            return []
        tasks: List[Task] = []
        for line_no, line in enumerate(split_records(text), start=1):
            if not line:
                continue
            tasks.append(parse_line(line, line_no))
        logger.debug("Loaded %d tasks from %s", len(tasks), self.path)
        return tasks

    def write_all(self, tasks: Sequence[Task]) -> None:
        self._write_lines([task.to_line() for task in tasks])
        self.remove_trailing_newline()

    def remove_trailing_newline(self) -> None:
        """Re-read the whole file and rewrite it without one trailing empty line."""
        text = self._read_text()
        if text is None:
            raise PersistenceError("Task file vanished during save", self.path)
        lines = split_records(text)
        if lines and lines[-1] == "":
            lines.pop()
        self._write_lines(lines)

    def reset(self) -> None:
        try:
            self.path.write_text("", encoding="utf-8")
        except OSError as exc:
            raise PersistenceError("Cannot create task file", self.path, exc) from exc

    def validate_field(self, field: str, value: str) -> None:
        if "\n" in value or "\r" in value:
            raise ValidationError(f"{field} cannot contain line breaks in the line format")
        if field == "body" and "," in value:
            raise ValidationError("body cannot contain ',' in the line format")
