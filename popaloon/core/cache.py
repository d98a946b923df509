"""
Time-bounded result cache.

One ``ResultCache`` is built by the application factory and shared by every
request. Entries carry their own TTL, so catalog lookups and leaderboard pages
can live side by side with different lifetimes. The cache only accelerates
reads: a broken backing store degrades to recomputation.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Hashable, Optional, Tuple, TypeVar

from cachetools import TLRUCache

from .config import CACHE_MAX_ENTRIES

logger = logging.getLogger(__name__)

T = TypeVar("T")


class _Miss:
    __slots__ = ()

    def __repr__(self) -> str:
        return "MISS"

    def __bool__(self) -> bool:
        return False


MISS: Any = _Miss()


@dataclass(frozen=True)
class _Entry:
    value: Any
    ttl: float


def _time_to_use(_key: Hashable, entry: _Entry, now: float) -> float:
    return now + entry.ttl


def _weight(entry: _Entry) -> int:
    """Rows held by an entry; a ranked population weighs one per user."""

    if isinstance(entry.value, (tuple, list)):
        return max(len(entry.value), 1)
    return 1


def cache_key(kind: str, *parts: Hashable) -> Tuple[Hashable, ...]:
    """Build a structured key; every part that shapes the result belongs here."""

    return (kind, *parts)


class ResultCache:
    """Thread-safe TTL cache with per-entry lifetimes."""

    def __init__(
        self,
        maxsize: int = CACHE_MAX_ENTRIES,
        timer: Callable[[], float] = time.monotonic,
    ):
        self._store: TLRUCache = TLRUCache(
            maxsize=maxsize, ttu=_time_to_use, timer=timer, getsizeof=_weight
        )
        self._lock = threading.RLock()

    def get(self, key: Hashable) -> Any:
        """Return the cached value or ``MISS``."""

        try:
            with self._lock:
                entry = self._store.get(key)
        except Exception:
            logger.warning("Cache read failed for %r, recomputing", key, exc_info=True)
            return MISS
        if entry is None:
            return MISS
        return entry.value

    def set(self, key: Hashable, value: Any, ttl: float) -> None:
        if ttl <= 0:
            return
        entry = _Entry(value, ttl)
        if _weight(entry) > self._store.maxsize:
            logger.debug("Not caching %r, larger than the whole cache", key)
            return
        try:
            with self._lock:
                self._store[key] = entry
        except Exception:
            logger.warning("Cache write failed for %r", key, exc_info=True)

    def get_or_compute(self, key: Hashable, ttl: float, compute: Callable[[], T]) -> T:
        """Serve ``key`` from the cache or store the result of ``compute()``."""

        cached = self.get(key)
        if cached is not MISS:
            logger.debug("Cache hit for %r", key)
            return cached

        logger.debug("Cache miss for %r", key)
        value = compute()
        self.set(key, value, ttl)
        return value

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)


def optional_token(value: Optional[Any]) -> str:
    """Key part for an optional bound; unset bounds share one explicit marker."""

    if value is None:
        return "unbounded"
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)


__all__ = ["MISS", "ResultCache", "cache_key", "optional_token"]
