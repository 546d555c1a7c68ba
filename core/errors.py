"""Error taxonomy for the task list."""

from pathlib import Path
from typing import Optional


class TodoError(Exception):
    """Base class for task list errors."""


class ValidationError(TodoError):
    """Field value rejected (empty description, text the backend cannot store)."""


class ParseError(TodoError):
    """Malformed persisted record."""

    def __init__(self, message: str, line_no: Optional[int] = None):
        self.line_no = line_no
        if line_no is not None:
            message = f"line {line_no}: {message}"
        super().__init__(message)


class PersistenceError(TodoError):
    """Reading or writing the data file failed.

    The in-memory store is not rolled back when this is raised, so the file
    may lag behind memory until the next successful write.
    """

    def __init__(self, message: str, path: Optional[Path] = None, cause: Optional[BaseException] = None):
        self.path = path
        self.cause = cause
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


__all__ = ["TodoError", "ValidationError", "ParseError", "PersistenceError"]
