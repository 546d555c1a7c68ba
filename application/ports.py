from pathlib import Path
from typing import List, Protocol, Sequence

from core import Task


class TaskStorage(Protocol):
    """Storage capability injected into TaskStore.

    Every call reopens the underlying file; implementations hold no handle
    between calls.
    """

    path: Path

    def read_all(self) -> List[Task]:
        ...

    def write_all(self, tasks: Sequence[Task]) -> None:
        ...

    def reset(self) -> None:
        ...

    def validate_field(self, field: str, value: str) -> None:
        ...
