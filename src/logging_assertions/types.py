"""Shared enums and aliases for the logger test double."""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable
from typing import Any

Equality = Callable[[Any, Any], bool]
Formatter = Callable[[Any, BaseException | None], str]


class LogLevel(enum.IntEnum):
    TRACE = 0
    DEBUG = 1
    INFORMATION = 2
    WARNING = 3
    ERROR = 4
    CRITICAL = 5
    NONE = 6

    @property
    def label(self) -> str:
        """Display name used in failure messages."""
        return LEVEL_LABELS[self]


LEVEL_LABELS: dict[LogLevel, str] = {
    LogLevel.TRACE: "Trace",
    LogLevel.DEBUG: "Debug",
    LogLevel.INFORMATION: "Information",
    LogLevel.WARNING: "Warning",
    LogLevel.ERROR: "Error",
    LogLevel.CRITICAL: "Critical",
    LogLevel.NONE: "None",
}

# Levels whose setup continuation may attach an expected exception.
ERROR_LEVELS = frozenset({LogLevel.ERROR, LogLevel.CRITICAL})


def level_from_stdlib(levelno: int) -> LogLevel:
    """Map a ``logging`` level number onto the closest :class:`LogLevel`."""
    if levelno < logging.DEBUG:
        return LogLevel.TRACE
    if levelno < logging.INFO:
        return LogLevel.DEBUG
    if levelno < logging.WARNING:
        return LogLevel.INFORMATION
    if levelno < logging.ERROR:
        return LogLevel.WARNING
    if levelno < logging.CRITICAL:
        return LogLevel.ERROR
    return LogLevel.CRITICAL
