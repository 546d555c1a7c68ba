from enum import Enum


class Backend(Enum):
    LINES = ("lines", "user_data")
    JSON = ("json", "user_data.json")

    @property
    def label(self) -> str:
        return self.value[0]

    @property
    def default_filename(self) -> str:
        return self.value[1]

    @classmethod
    def from_string(cls, value: str) -> "Backend":
        token = (value or "").strip().lower()
        for backend in cls:
            if backend.label == token:
                return backend
        raise ValueError(f"Unknown storage backend: {value!r}")
