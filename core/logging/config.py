from __future__ import annotations

import logging
import os
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler
from pathlib import Path
from queue import Queue
from typing import Optional

from .formatter import ConsoleFormatter, ContextFilter, JSONFormatter
from .levels import register_levels, to_level

_listener: Optional[QueueListener] = None


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes")


def bootstrap_logging(
    *,
    service: str = "practice",
    level: str | int | None = None,
    log_dir: Optional[Path] = None,
    log_file_name: str = "practice.log",
    console: Optional[bool] = None,
    max_bytes: int = 5_000_000,
    backup_count: int = 5,
) -> None:
    """Configure the root logger once per process.

    JSON lines go to ``log_dir/log_file_name`` through a queue so scans never
    block on disk. The console handler is on when ``console`` is True or
    ``LOG_CONSOLE=true``.
    """
    global _listener
    shutdown_logging()
    register_levels()

    root = logging.getLogger()
    root.handlers.clear()
    lvl = to_level(level if level is not None else os.getenv("LOG_LEVEL"))
    root.setLevel(lvl)
    context_filter = ContextFilter()

    if console if console is not None else _env_flag("LOG_CONSOLE"):
        stream = logging.StreamHandler()
        stream.setLevel(to_level(os.getenv("LOG_CONSOLE_LEVEL"), default=lvl))
        stream.setFormatter(ConsoleFormatter(color=_env_flag("LOG_COLOR", "true")))
        stream.addFilter(context_filter)
        root.addHandler(stream)

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            str(log_dir / log_file_name), maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        )
        file_handler.setLevel(lvl)
        file_handler.setFormatter(JSONFormatter())
        queue: Queue[logging.LogRecord] = Queue(-1)
        queue_handler = QueueHandler(queue)
        queue_handler.addFilter(context_filter)
        root.addHandler(queue_handler)
        _listener = QueueListener(queue, file_handler, respect_handler_level=True)
        _listener.start()

    # Chatty third-party loggers stay at WARNING unless asked for.
    for noisy in ("httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(max(lvl, logging.WARNING))

    logging.getLogger(__name__).debug("logging-ready service=%s level=%s", service, logging.getLevelName(lvl))


def shutdown_logging() -> None:
    """Flush and stop the file listener, if running."""
    global _listener
    if _listener is not None:
        _listener.stop()
        _listener = None
