"""
app/services/state_cache.py

Time-bounded in-memory cache for per-state response payloads.

Entries are valid while ``now - stored_at < ttl``. Expired entries are kept
until they are replaced or invalidated so they can be served as a labelled
stale fallback when the producing pipeline fails.

Reads and writes are serialized with a lock. The producer itself runs
outside the lock, so two concurrent misses for one key may both compute;
the later write wins.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Literal

logger = logging.getLogger(__name__)

CacheSource = Literal["fresh", "cache", "stale"]


@dataclass(frozen=True)
class CacheEntry:
    key: str
    payload: Any
    stored_at: float


@dataclass(frozen=True)
class CacheLookup:
    """
    Payload returned by :meth:`StateCache.get` with where it came from.
    """

    payload: Any
    source: CacheSource
    age_seconds: float = 0.0

    @property
    def is_stale(self) -> bool:
        return self.source == "stale"


class StateCache:
    """
    TTL cache keyed by requested state identifier.
    """

    def __init__(
        self,
        *,
        ttl_seconds: float = 3600.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl_seconds = max(0.0, ttl_seconds)
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    @property
    def ttl_seconds(self) -> float:
        return self._ttl_seconds

    def get(
        self,
        key: str,
        producer: Callable[[], Any],
        *,
        stale_on: tuple[type[BaseException], ...] = (),
    ) -> CacheLookup:
        """
        Return a fresh cached payload or compute, store and return a new one.

        When ``producer`` raises one of ``stale_on`` and an expired entry
        exists for ``key``, that entry is returned with ``source="stale"``.
        Otherwise the exception propagates.
        """

        with self._lock:
            entry = self._entries.get(key)
            now = self._clock()
            if entry is not None and now - entry.stored_at < self._ttl_seconds:
                age = now - entry.stored_at
                logger.debug("Cache hit key=%r age=%.0fs", key, age)
                return CacheLookup(payload=entry.payload, source="cache", age_seconds=age)

        try:
            payload = producer()
        except stale_on as exc:
            with self._lock:
                entry = self._entries.get(key)
                now = self._clock()
            if entry is None:
                raise
            logger.warning("Serving stale cache for key=%r after failure: %s", key, exc)
            return CacheLookup(
                payload=entry.payload,
                source="stale",
                age_seconds=now - entry.stored_at,
            )

        self.set(key, payload)
        return CacheLookup(payload=payload, source="fresh")

    def peek(self, key: str) -> CacheEntry | None:
        """
        Return the stored entry for ``key`` regardless of age.
        """

        with self._lock:
            return self._entries.get(key)

    def set(self, key: str, payload: Any) -> None:
        with self._lock:
            self._entries[key] = CacheEntry(key=key, payload=payload, stored_at=self._clock())

    def invalidate(self, key: str | None = None) -> list[str]:
        """
        Remove one entry, or every entry when ``key`` is omitted.

        Returns the keys that were removed; clearing a missing key is a no-op.
        """

        with self._lock:
            if key is None:
                cleared = list(self._entries)
                self._entries.clear()
            elif key in self._entries:
                del self._entries[key]
                cleared = [key]
            else:
                cleared = []
        logger.info("Cache invalidated keys=%s", cleared)
        return cleared

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
