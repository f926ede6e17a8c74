# src/listkeeper/logging_setup.py

"""
Logging for the interactive list keeper.

The terminal is shared with the prompt, so stderr only gets what a user of
the console should see. The log file under the data dir keeps everything.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import TextIO

APP_LOGGER = "listkeeper"
LOG_FILE_NAME = "listkeeper.log"

# Loggers that run off the prompt thread; only their warnings reach the console.
BACKGROUND_LOGGERS: tuple[str, ...] = ("listkeeper.tasks.persistence",)

_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _under(name: str, prefix: str) -> bool:
    return name == prefix or name.startswith(prefix + ".")


class ConsoleFilter(logging.Filter):
    """
    Console gate by logger name:
    - background loggers: WARNING and up
    - other listkeeper loggers: everything the handler level lets through
    - py.warnings and third-party loggers: ERROR and up
    """

    def __init__(self, background: Iterable[str] = BACKGROUND_LOGGERS) -> None:
        super().__init__()
        self.background = tuple(background)

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if any(_under(name, prefix) for prefix in self.background):
            return record.levelno >= logging.WARNING
        if _under(name, APP_LOGGER):
            return True
        return record.levelno >= logging.ERROR


def _console_handler(level: int, stream: TextIO | None) -> logging.Handler:
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)
    handler.addFilter(ConsoleFilter())
    return handler


def _file_handler(path: Path, level: int) -> logging.Handler:
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    return handler


def setup_logging(
    *,
    log_dir: str | Path = ".local/listkeeper",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
    stream: TextIO | None = None,
) -> Path:
    """
    Replace the root handlers with a filtered console handler and a file handler.

    Call once at startup, before the first log line. Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)
    root.setLevel(min(console_level, file_level))

    formatter = logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT)
    for handler in (_console_handler(console_level, stream), _file_handler(log_file, file_level)):
        handler.setFormatter(formatter)
        root.addHandler(handler)

    # warnings.warn(...) -> 'py.warnings' logger
    logging.captureWarnings(True)
    return log_file
