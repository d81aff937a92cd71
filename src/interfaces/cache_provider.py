"""Abstract base class for cache service providers.

Defines the contract for the request cache that sits in front of the
upstream Tarkov services.  The shipped implementation is in-memory; a shared
external store (e.g. Redis) can implement the same contract for deployments
with more than one worker process.

Freshness is judged by the reader: :meth:`get` takes the TTL of the key's
class, and an entry older than that TTL reads as absent while remaining
physically stored until it is overwritten or invalidated.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class ICacheProvider(ABC):
    """Contract for key-value caches with read-time TTL judgement.

    Operations are synchronous: every operation is single-key (or whole-store)
    and completes within one scheduling turn of the event loop.
    """

    @abstractmethod
    def get(self, key: str, ttl: float) -> Any | None:
        """Return the value stored under *key* if it is younger than *ttl*.

        Parameters
        ----------
        key:
            The cache key to look up.
        ttl:
            Maximum age in seconds at which the entry is still fresh.

        Returns
        -------
        Any or None
            The cached value when present and fresh; ``None`` otherwise.
        """

    @abstractmethod
    def put(self, key: str, value: Any) -> None:
        """Store *value* under *key*, replacing any previous entry.

        The entry's timestamp is reset to the current time.
        """

    @abstractmethod
    def invalidate(self, key: str) -> bool:
        """Remove the entry stored under *key*.

        Returns
        -------
        bool
            ``True`` if an entry existed (fresh or stale) and was removed.
        """

    @abstractmethod
    def invalidate_all(self) -> int:
        """Remove every entry and return how many were removed."""

    @abstractmethod
    def contains(self, key: str) -> bool:
        """Return ``True`` if an entry for *key* is physically stored, fresh or not."""

    @abstractmethod
    def __len__(self) -> int:
        """Number of entries physically stored."""
