"""
app/logging_utils.py

Structured logging helpers for request and data-loading workflows.

Every event is one compact JSON line so log shippers can index fields like
``state`` and ``source`` without parsing free text.
"""

from __future__ import annotations

import json
import logging
import time
from contextlib import contextmanager
from typing import Any, Iterator

MAX_FIELD_CHARS = 300


def _clip(value: Any) -> Any:
    # Header lists in schema errors can be arbitrarily long.
    if isinstance(value, str) and len(value) > MAX_FIELD_CHARS:
        return value[:MAX_FIELD_CHARS] + "..."
    if isinstance(value, (list, tuple)) and len(value) > 20:
        return [*value[:20], f"... {len(value) - 20} more"]
    return value


def log_event(
    logger: logging.Logger,
    level: int,
    event: str,
    **fields: Any,
) -> None:
    """
    Emit one structured log line as compact JSON.
    """

    if not logger.isEnabledFor(level):
        return
    payload = {"event": event, **{key: _clip(value) for key, value in fields.items()}}
    logger.log(level, json.dumps(payload, default=str, sort_keys=True))


@contextmanager
def timed_event(
    logger: logging.Logger,
    event: str,
    *,
    level: int = logging.DEBUG,
    **fields: Any,
) -> Iterator[dict[str, Any]]:
    """
    Log ``event`` with ``elapsed_ms`` once the block finishes.

    The yielded dict can be filled with extra fields inside the block. A
    failing block is logged with ``ok=False`` and the exception re-raised.
    """

    extra: dict[str, Any] = {}
    started = time.perf_counter()
    ok = True
    try:
        yield extra
    except Exception:
        ok = False
        raise
    finally:
        elapsed_ms = round((time.perf_counter() - started) * 1000.0, 2)
        log_event(logger, level, event, elapsed_ms=elapsed_ms, ok=ok, **fields, **extra)
