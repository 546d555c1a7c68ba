from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from core import Backend

DEFAULT_BACKEND = Backend.JSON
DEFAULT_TICK_MS = 250
DEFAULT_THEME = "dark-olive"
APP_DIRNAME = "todo-app"


def user_config_path() -> Path:
    env_path = os.environ.get("TODO_TUI_CONFIG")
    if env_path:
        return Path(env_path).expanduser()
    return Path.home() / ".todo_tui_config.yaml"


def _load_config() -> Dict[str, Any]:
    path = user_config_path()
    if not path.exists():
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError):
        return {}
    return data if isinstance(data, dict) else {}


def _save_config(data: Dict[str, Any]) -> None:
    path = user_config_path()
    if not data:
        if path.exists():
            path.unlink()
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(data, allow_unicode=True), encoding="utf-8")


def get_config_value(key: str, default: Any = None) -> Any:
    return _load_config().get(key, default)


def set_config_value(key: str, value: Any) -> None:
    data = _load_config()
    if value is None or (isinstance(value, str) and not value.strip()):
        data.pop(key, None)
    else:
        data[key] = value
    _save_config(data)


def data_dir() -> Path:
    base = os.environ.get("XDG_DATA_HOME") or str(Path.home() / ".local" / "share")
    return Path(base).expanduser() / APP_DIRNAME


@dataclass
class AppSettings:
    data_file: Path
    backend: Backend
    tick_ms: int
    theme: str

    @property
    def tick_interval(self) -> float:
        return self.tick_ms / 1000.0


def resolve_settings(
    data_file: Optional[str] = None,
    backend: Optional[str] = None,
    tick_ms: Optional[int] = None,
    theme: Optional[str] = None,
) -> AppSettings:
    """Merge CLI values, environment and the YAML config, in that order of precedence."""
    config = _load_config()

    backend_token = backend or os.environ.get("TODO_TUI_BACKEND") or config.get("backend")
    resolved_backend = Backend.from_string(backend_token) if backend_token else DEFAULT_BACKEND

    tick_value = tick_ms if tick_ms is not None else os.environ.get("TODO_TUI_TICK_MS", config.get("tick_ms"))
    try:
        resolved_tick = int(tick_value) if tick_value is not None else DEFAULT_TICK_MS
    except (TypeError, ValueError):
        raise ValueError(f"tick_ms must be an integer, got {tick_value!r}") from None
    if resolved_tick <= 0:
        raise ValueError(f"tick_ms must be positive, got {resolved_tick}")

    path_value = data_file or os.environ.get("TODO_TUI_DATA_FILE") or config.get("data_file")
    if path_value:
        resolved_path = Path(str(path_value)).expanduser()
    else:
        resolved_path = data_dir() / resolved_backend.default_filename

    return AppSettings(
        data_file=resolved_path,
        backend=resolved_backend,
        tick_ms=resolved_tick,
        theme=theme or str(config.get("theme") or DEFAULT_THEME),
    )
