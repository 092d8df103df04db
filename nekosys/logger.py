"""Coloured log output with per-crate level overrides."""

from __future__ import annotations

import logging
import os
import re
import sys
import threading
import traceback
from datetime import datetime
from enum import IntEnum
from typing import TextIO

LOG_ENV = "NEKOSYS_LOG"
BACKTRACE_ENV = "NEKOSYS_BACKTRACE"
TRACE = 5

_RESET = "\x1b[0m"


def _paint(text: str, code: int) -> str:
    return f"\x1b[{code}m{text}{_RESET}"


class Level(IntEnum):
    """Log severity; smaller values are more severe."""

    ERROR = 1
    WARN = 2
    INFO = 3
    DEBUG = 4
    TRACE = 5

    @classmethod
    def parse(cls, text: str) -> Level:
        """Parse a level name, ignoring case."""
        try:
            return cls[text.strip().upper()]
        except KeyError:
            raise ValueError(f"unknown log level: {text!r}") from None

    @classmethod
    def _from_levelno(cls, levelno: int) -> Level:
        if levelno >= logging.ERROR:
            return cls.ERROR
        if levelno >= logging.WARNING:
            return cls.WARN
        if levelno >= logging.INFO:
            return cls.INFO
        if levelno >= logging.DEBUG:
            return cls.DEBUG
        return cls.TRACE


_COLOURS = {
    Level.ERROR: 31,
    Level.WARN: 33,
    Level.INFO: 32,
    Level.DEBUG: 34,
    Level.TRACE: 35,
}


class Logger(logging.Handler):
    """A logging handler that prints coloured lines to a stream."""

    def __init__(self, level: Level = Level.INFO, stream: TextIO | None = None) -> None:
        super().__init__()
        self._state_lock = threading.Lock()
        self.log_level = level
        self.crate_levels: list[tuple[str, Level]] = []
        self.stream = stream

    def set_level(self, level: Level) -> None:
        with self._state_lock:
            self.log_level = level

    def set_crate_level(self, target: str, level: Level) -> None:
        with self._state_lock:
            self.crate_levels.append((target, level))

    def enabled(self, target: str, level: Level) -> bool:
        """Whether a message at ``level`` from ``target`` is shown."""
        crate_name = re.split(r"::|\.", target, maxsplit=1)[0]
        with self._state_lock:
            for name, crate_level in self.crate_levels:
                if crate_name == name:
                    return level <= crate_level
            return level <= self.log_level

    def colorize(self, level: Level) -> str:
        return _paint(level.name, _COLOURS[level])

    def format_line(
        self, target: str, level: Level, message: str, now: datetime | None = None
    ) -> str:
        stamp = (now or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")
        return f"{_paint(stamp, 90)} {self.colorize(level)}: {_paint(target, 94)} - {message}"

    def emit(self, record: logging.LogRecord) -> None:
        level = Level._from_levelno(record.levelno)
        if not self.enabled(record.name, level):
            return
        try:
            line = self.format_line(record.name, level, record.getMessage())
            stream = self.stream if self.stream is not None else sys.stderr
            stream.write(line + "\n")
            stream.flush()
        except Exception:
            self.handleError(record)


def format_panic(location: str | None, payload: str | None, backtrace: str | None = None) -> str:
    """Render an unhandled error the way the crash hook reports it."""
    location = location or "Unknown location"
    payload = payload or "Unknown Payload"
    lines = []
    for i, line in enumerate(payload.splitlines()):
        if not line.strip():
            continue
        lines.append(line if i == 0 else f"\t\t||  {line}")
    body = "\n".join(lines)
    if backtrace is None:
        backtrace = f"  Run with {BACKTRACE_ENV}=1 environment variable to display backtrace"
    trace = "\n".join(f"\t\t|{line}" for line in backtrace.splitlines())
    return (
        f"Panic occurred at: {_paint(location, 30)}\n"
        f"\t\t-----------------> {_paint(body, 91)}\n{trace}"
    )


_LOGGER: Logger | None = None
_INSTALLED = False
_GLOBAL_LOCK = threading.Lock()


def _crash_hook(exc_type, exc, tb) -> None:
    frames = traceback.extract_tb(tb)
    location = f"{frames[-1].filename}:{frames[-1].lineno}" if frames else None
    payload = str(exc) or exc_type.__name__
    backtrace = "".join(traceback.format_tb(tb)) if os.environ.get(BACKTRACE_ENV) else None
    logging.getLogger(__name__).error("%s", format_panic(location, payload, backtrace))


def init() -> Logger:
    """Install the logger on the root logger and the crash hook.

    Raises RuntimeError when a logger has already been installed.
    """
    global _LOGGER, _INSTALLED
    with _GLOBAL_LOCK:
        if _LOGGER is None:
            try:
                level = Level.parse(os.environ.get(LOG_ENV, "info"))
            except ValueError:
                level = Level.INFO
            _LOGGER = Logger(level)
        if _INSTALLED:
            raise RuntimeError("a logger has already been initialized")
        logging.addLevelName(TRACE, "TRACE")
        sys.excepthook = _crash_hook
        root = logging.getLogger()
        root.addHandler(_LOGGER)
        root.setLevel(TRACE)
        _INSTALLED = True
        return _LOGGER


def get_raw_logger() -> Logger:
    if _LOGGER is None:
        raise RuntimeError("logger has not been initialized")
    return _LOGGER


def set_level(level: Level) -> None:
    get_raw_logger().set_level(level)


def set_crate_log(target: str, level: Level) -> None:
    get_raw_logger().set_crate_level(target, level)