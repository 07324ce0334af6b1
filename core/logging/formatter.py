from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict

from .context import get_context

_LEVEL_COLORS = {
    "TRACE": "\033[90m",
    "DEBUG": "\033[37m",
    "INFO": "\033[36m",
    "SUCCESS": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}
_RESET = "\033[0m"


def _timestamp(record: logging.LogRecord) -> str:
    return datetime.fromtimestamp(record.created, tz=timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


class ContextFilter(logging.Filter):
    """Copies the bound context onto the record in the emitting thread."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "context"):
            record.context = get_context()
        return True


def _record_context(record: logging.LogRecord) -> Dict[str, Any]:
    ctx = getattr(record, "context", None)
    return ctx if ctx is not None else get_context()


def _base_fields(record: logging.LogRecord) -> Dict[str, Any]:
    return {
        "ts": _timestamp(record),
        "level": record.levelname,
        "service": getattr(record, "service", None),
        "logger": record.name,
        "function": record.funcName,
        "line": record.lineno,
    }


class ConsoleFormatter(logging.Formatter):
    """``ts LEVEL service logger:line message key=value ...``"""

    def __init__(self, *, color: bool = True) -> None:
        super().__init__()
        self.color = color

    def format(self, record: logging.LogRecord) -> str:
        fields = _base_fields(record)
        parts = [
            fields["ts"],
            f"{record.levelname:<8}",
            fields["service"] or "-",
            f"{record.name}:{record.lineno}",
            record.getMessage(),
        ]
        parts.extend(f"{k}={v}" for k, v in _record_context(record).items())
        exec_ms = getattr(record, "execution_time_ms", None)
        if exec_ms is not None:
            parts.append(f"t={exec_ms}ms")
        line = " ".join(parts)
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        if not self.color:
            return line
        return f"{_LEVEL_COLORS.get(record.levelname, '')}{line}{_RESET}"


class JSONFormatter(logging.Formatter):
    """One JSON object per line; context fields are merged at the top level."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = _base_fields(record)
        payload["message"] = record.getMessage()
        for key, value in _record_context(record).items():
            payload.setdefault(key, value)
        exec_ms = getattr(record, "execution_time_ms", None)
        if exec_ms is not None:
            payload["execution_time_ms"] = exec_ms
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, separators=(",", ":"))
