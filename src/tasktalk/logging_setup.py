# src/tasktalk/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Libraries that log every HTTP request at INFO.
_CHATTY_LIBS = ("httpx", "httpcore", "openai")


class _AppOnlyFilter(logging.Filter):
    """Console filter: tasktalk records pass, everything else only at ERROR+."""

    def __init__(self, app_prefix: str = "tasktalk") -> None:
        super().__init__()
        self._prefix = app_prefix

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if name == self._prefix or name.startswith(self._prefix + "."):
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = ".local/tasktalk",
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Route logs to stderr (app records only, so the REPL stays readable)
    and to `<log_dir>/tasktalk.log` (everything at `file_level`).

    Replaces any handlers already on the root logger. Returns the log file path.
    """
    log_file = Path(log_dir) / "tasktalk.log"
    log_file.parent.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(formatter)
    console.addFilter(_AppOnlyFilter())

    file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
    file_handler.setLevel(file_level)
    file_handler.setFormatter(formatter)

    root.addHandler(console)
    root.addHandler(file_handler)

    # warnings.warn(...) -> 'py.warnings' logger
    logging.captureWarnings(True)

    for lib in _CHATTY_LIBS:
        logging.getLogger(lib).setLevel(logging.WARNING)

    return log_file
