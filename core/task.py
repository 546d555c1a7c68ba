from dataclasses import dataclass
from typing import Any, Dict

from .errors import ValidationError


@dataclass
class Task:
    """A single entry of the task list.

    ``id`` mirrors the task's position at the moment it was appended to the
    store; it is not a stable identifier.
    """

    id: int
    description: str
    body: str = ""
    completed: bool = False

    def __post_init__(self) -> None:
        if not self.description:
            raise ValidationError("description is empty")
        if self.id < 0:
            raise ValidationError(f"id must not be negative: {self.id}")

    def change_text(self, text: str) -> None:
        if not text:
            raise ValidationError("description is empty")
        self.description = text

    def set_body(self, body: str) -> None:
        self.body = body

    def toggle_completed(self) -> None:
        self.completed = not self.completed

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "completed": self.completed,
            "body": self.body,
        }

    def to_line(self) -> str:
        return f"{self.id},{self.description},{str(self.completed).lower()},{self.body}"

    def render_legacy(self) -> str:
        mark = "[x]" if self.completed else "[]"
        if self.body:
            return f"{self.description} {mark} {self.body} \n"
        return f"{self.description} {mark} \n"
