from __future__ import annotations

import logging
from enum import IntEnum


class LogLevel(IntEnum):
    TRACE = 5
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    SUCCESS = 25
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL


_CUSTOM = (LogLevel.TRACE, LogLevel.SUCCESS)


def register_levels() -> None:
    """Give TRACE and SUCCESS their names in stdlib logging (idempotent)."""
    for level in _CUSTOM:
        if logging.getLevelName(int(level)) != level.name:
            logging.addLevelName(int(level), level.name)


def to_level(value: int | str | None, default: int = logging.INFO) -> int:
    """Resolve a level name or number; unknown names give ``default``."""
    if value is None or value == "":
        return default
    if isinstance(value, int):
        return value
    name = value.strip().upper()
    if name in LogLevel.__members__:
        return int(LogLevel[name])
    return default
