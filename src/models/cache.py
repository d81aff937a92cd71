"""Cache entry model owned by the TTL cache store."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CacheEntry(BaseModel):
    """A single stored value and the clock reading at which it was written.

    Entries are immutable: a refresh replaces the whole entry, so
    ``stored_at`` never moves backwards for a key.  Freshness is not a
    property of the entry; the reader supplies the TTL of the key's class.
    """

    model_config = ConfigDict(frozen=True)

    key: str = Field(description="Namespaced cache key.")
    value: Any = Field(description="The cached payload, stored as-is.")
    stored_at: float = Field(description="Store clock reading at write time.")

    def age(self, now: float) -> float:
        """Seconds elapsed between the write and *now*."""
        return now - self.stored_at

    def is_fresh(self, ttl: float, now: float) -> bool:
        return self.age(now) < ttl
