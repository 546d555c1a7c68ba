from .backend import Backend
from .errors import ParseError, PersistenceError, TodoError, ValidationError
from .task import Task

__all__ = [
    "Backend",
    "Task",
    # Errors
    "TodoError",
    "ValidationError",
    "ParseError",
    "PersistenceError",
]
