"""In-memory cache provider with read-time TTL judgement.

Entries live in a ``cachetools.LRUCache`` so key churn cannot grow the store
without bound; the least-recently-used entry is evicted once ``max_size`` is
reached.  Age never removes an entry: a stale value simply reads as absent
until the next write for that key replaces it.
"""

from __future__ import annotations

import time
from typing import Any, Callable

import structlog
from cachetools import LRUCache

from src.interfaces.cache_provider import ICacheProvider
from src.models.cache import CacheEntry
from src.utils.logging import get_logger

logger: structlog.BoundLogger = get_logger(__name__)


class MemoryCacheProvider(ICacheProvider):
    """Process-local TTL cache store.

    Parameters
    ----------
    max_size:
        Maximum number of entries before the least-recently-used entry
        is evicted.
    clock:
        Zero-argument callable returning seconds.  Defaults to
        ``time.monotonic`` so wall-clock adjustments cannot make an
        entry younger.
    """

    def __init__(
        self,
        max_size: int = 10_000,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._clock = clock
        self._entries: LRUCache[str, CacheEntry] = LRUCache(maxsize=max_size)

    # ------------------------------------------------------------------
    # ICacheProvider implementation
    # ------------------------------------------------------------------

    def get(self, key: str, ttl: float) -> Any | None:
        """Return the value for *key* if younger than *ttl*, else ``None``."""
        entry = self._entries.get(key)
        if entry is None:
            logger.debug("cache_miss", key=key)
            return None
        if not entry.is_fresh(ttl, self._clock()):
            logger.debug("cache_stale", key=key, age=round(entry.age(self._clock()), 3), ttl=ttl)
            return None
        logger.debug("cache_hit", key=key)
        return entry.value

    def put(self, key: str, value: Any) -> None:
        self._entries[key] = CacheEntry(key=key, value=value, stored_at=self._clock())
        logger.debug("cache_set", key=key)

    def invalidate(self, key: str) -> bool:
        existed = self._entries.pop(key, None) is not None
        logger.debug("cache_delete", key=key, existed=existed)
        return existed

    def invalidate_all(self) -> int:
        removed = len(self._entries)
        self._entries.clear()
        logger.debug("cache_clear", removed=removed)
        return removed

    def contains(self, key: str) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def entry(self, key: str) -> CacheEntry | None:
        """Return the raw entry for *key*, ignoring freshness."""
        return self._entries.get(key)

    @property
    def max_size(self) -> int:
        return int(self._entries.maxsize)
