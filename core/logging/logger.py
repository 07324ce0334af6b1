from __future__ import annotations

import functools
import logging
import os
import time
from typing import Any, Callable, Optional, Protocol, Union

from .context import get_context
from .levels import LogLevel


class SupportsStr(Protocol):
    def __str__(self) -> str: ...


Message = Union[SupportsStr, Callable[[], SupportsStr]]


class StructuredLogger:
    """Thin wrapper over a stdlib logger.

    Messages may be lambdas so f-strings are only built when the level is
    enabled. Every record carries the ``service`` name and the bound context.
    """

    def __init__(self, logger: logging.Logger, service: Optional[str] = None) -> None:
        self._logger = logger
        self._service = service

    @property
    def name(self) -> str:
        return self._logger.name

    def is_enabled_for(self, level: int) -> bool:
        return self._logger.isEnabledFor(level)

    def _log(self, level: int, msg: Message, *args: Any, **kwargs: Any) -> None:
        if not self._logger.isEnabledFor(level):
            return
        message = msg() if callable(msg) else msg
        extra = dict(kwargs.pop("extra", None) or {})
        extra.setdefault("service", self._service)
        extra.setdefault("context", get_context())
        # stacklevel 2 points the record at the caller, not at this wrapper
        kwargs.setdefault("stacklevel", 2)
        self._logger.log(level, str(message), *args, extra=extra, **kwargs)

    trace = functools.partialmethod(_log, int(LogLevel.TRACE))
    debug = functools.partialmethod(_log, logging.DEBUG)
    info = functools.partialmethod(_log, logging.INFO)
    success = functools.partialmethod(_log, int(LogLevel.SUCCESS))
    warning = functools.partialmethod(_log, logging.WARNING)
    error = functools.partialmethod(_log, logging.ERROR)
    critical = functools.partialmethod(_log, logging.CRITICAL)

    def exception(self, msg: Message, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault("exc_info", True)
        self._log(logging.ERROR, msg, *args, stacklevel=3, **kwargs)


def get_logger(name: str, *, service: Optional[str] = None) -> StructuredLogger:
    return StructuredLogger(logging.getLogger(name), service=service)


def traceable(fn: Callable[..., Any]) -> Callable[..., Any]:
    """Log entry, exit and duration at TRACE when ``DEBUG_TRACE=true``.

    Evaluated at import time, so the flag must be set before modules load.
    """
    if os.getenv("DEBUG_TRACE", "").strip().lower() != "true":
        return fn

    logger = get_logger(fn.__module__, service="trace")

    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        start = time.perf_counter()
        logger.trace(lambda: f"enter {fn.__qualname__}")
        try:
            return fn(*args, **kwargs)
        except Exception as e:
            logger.error(lambda: f"raised {fn.__qualname__} {type(e).__name__}: {e}")
            raise
        finally:
            elapsed = round((time.perf_counter() - start) * 1000.0, 2)
            logger.trace(lambda: f"exit {fn.__qualname__}", extra={"execution_time_ms": elapsed})

    return wrapper
