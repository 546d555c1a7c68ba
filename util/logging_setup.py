from __future__ import annotations

import logging
from pathlib import Path

LOG_FILENAME = "todo-tui.log"


def setup_logging(*, log_dir: str | Path, level: int = logging.INFO) -> Path:
    """Send all logs to ``<log_dir>/todo-tui.log``.

    The TUI owns the terminal, so nothing is attached to stderr. Call once,
    before the store is loaded.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILENAME

    root = logging.getLogger()
    root.setLevel(level)
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()

    fh = logging.FileHandler(str(log_file), encoding="utf-8")
    fh.setLevel(level)
    fh.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root.addHandler(fh)

    # Route warnings.warn(...) into logging as 'py.warnings'
    logging.captureWarnings(True)
    return log_file
