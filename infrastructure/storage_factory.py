from pathlib import Path

from application.ports import TaskStorage
from core import Backend
from infrastructure.json_storage import JsonTaskStorage
from infrastructure.line_storage import LineTaskStorage


def build_storage(backend: Backend, path: Path) -> TaskStorage:
    if backend is Backend.JSON:
        return JsonTaskStorage(path)
    return LineTaskStorage(path)
