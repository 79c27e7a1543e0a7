"""Module-scoped logging with simple severity levels."""

from __future__ import annotations

import enum
import sys
import time
from typing import TextIO

_LABELS = ("OFF", "FATAL", "ERROR", "WARNING", "INFO", "DEBUG", "TRACE")


class Level(enum.IntEnum):
    """Log level; a logger emits messages up to and including its level."""

    OFF = 0
    FATAL = 1
    ERROR = 2
    WARN = 3
    INFO = 4
    DEBUG = 5
    TRACE = 6

    @property
    def label(self) -> str:
        return _LABELS[self.value]

    def __str__(self) -> str:
        return self.label


class Logger:
    """A logger bound to a module name that filters by level."""

    def __init__(self, module: str, level: Level = Level.DEBUG, stream: TextIO | None = None):
        self.module = module
        self.level = level
        self.stream = stream

    def set_level(self, level: Level) -> None:
        """Omit messages above the given level from now on."""
        self.level = Level(level)

    def trace(self, message: str) -> None:
        self._log(Level.TRACE, message)

    def debug(self, message: str) -> None:
        self._log(Level.DEBUG, message)

    def info(self, message: str) -> None:
        self._log(Level.INFO, message)

    def warn(self, message: str) -> None:
        self._log(Level.WARN, message)

    def error(self, message: str) -> None:
        self._log(Level.ERROR, message)

    def fatal(self, message: str) -> None:
        self._log(Level.FATAL, message)

    def _log(self, level: Level, message: str) -> None:
        if self.level < level:
            return
        stamp = time.strftime("%Y/%m/%d %H:%M:%S")
        stream = self.stream if self.stream is not None else sys.stderr
        stream.write(f"{stamp} [{level.label[:4]}] - {self.module} - {message}\n")


def get_logger(module: str) -> Logger:
    """Create a logger for the given module at DEBUG level."""
    return Logger(module)