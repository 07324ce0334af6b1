from __future__ import annotations

import contextvars
from contextlib import contextmanager
from typing import Any, Dict, Iterator

# Fields attached to every record emitted in the current task, e.g. scan_id.
_context: contextvars.ContextVar[Dict[str, Any]] = contextvars.ContextVar("practice_log_context", default={})


def get_context() -> Dict[str, Any]:
    return dict(_context.get())


@contextmanager
def context(**values: Any) -> Iterator[Dict[str, Any]]:
    """Bind fields for the duration of the block, restoring the previous set after."""
    token = _context.set({**_context.get(), **{k: v for k, v in values.items() if v is not None}})
    try:
        yield get_context()
    finally:
        _context.reset(token)
