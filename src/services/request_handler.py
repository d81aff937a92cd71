"""Cache-coordinated request handler.

Composes the cache store with a producer coroutine: a fresh cached value is
returned directly, otherwise the producer runs and its result is stored.

Without coalescing, two concurrent misses on one key both run the producer
and the later write wins.  With ``coalesce=True`` the first miss starts the
producer as its own task and registers it as the key's in-flight call; every
miss, the first included, awaits that task through ``asyncio.shield``.  A
caller that is cancelled therefore leaves the upstream call and the other
waiters untouched.  The task is released once its result lands.
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable

import structlog

from src.interfaces.cache_provider import ICacheProvider
from src.utils.logging import get_logger

Producer = Callable[[], Awaitable[Any]]


class CacheCoordinatedHandler:
    """Read-through access to an :class:`ICacheProvider`.

    Parameters
    ----------
    cache:
        The store results are read from and written to.
    coalesce:
        Share one in-flight producer call between concurrent misses on
        the same key.
    """

    def __init__(self, cache: ICacheProvider, coalesce: bool = False) -> None:
        self._cache = cache
        self._coalesce = coalesce
        self._in_flight: dict[str, asyncio.Task[Any]] = {}
        self._logger: structlog.BoundLogger = get_logger(__name__)

    @property
    def cache(self) -> ICacheProvider:
        return self._cache

    @property
    def in_flight(self) -> int:
        """Number of keys with a producer call currently pending."""
        return len(self._in_flight)

    async def resolve(self, key: str, ttl: float, producer: Producer) -> Any:
        """Return the fresh cached value for *key* or produce and store a new one.

        Producer exceptions propagate and nothing is stored.
        """
        cached = self._cache.get(key, ttl)
        if cached is not None:
            return cached

        if not self._coalesce:
            return await self._produce(key, producer)

        task = self._in_flight.get(key)
        if task is None:
            task = asyncio.ensure_future(self._produce(key, producer))
            self._in_flight[key] = task
            task.add_done_callback(lambda done: self._release(key, done))
        else:
            self._logger.debug("request_coalesced", key=key)
        return await asyncio.shield(task)

    async def _produce(self, key: str, producer: Producer) -> Any:
        value = await producer()
        self._cache.put(key, value)
        return value

    def _release(self, key: str, task: asyncio.Task[Any]) -> None:
        if self._in_flight.get(key) is task:
            del self._in_flight[key]
        # Marks the exception retrieved even when every waiter was cancelled.
        if not task.cancelled() and task.exception() is not None:
            self._logger.debug("coalesced_call_failed", key=key)
