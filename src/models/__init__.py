"""Tarkov Search API domain models -- re-exports all public model classes.

    - cache.py   -- CacheEntry owned by the TTL cache store
    - fetch.py   -- FetchResult tagged outcome and FetchPolicy
    - tarkov.py  -- Ban status, ban statistics and price history payloads
"""

from __future__ import annotations

from src.models.cache import CacheEntry
from src.models.fetch import FetchOutcome, FetchPolicy, FetchResult
from src.models.tarkov import BanStats, BanStatus, PriceHistory, TarkovPayload

__all__ = [
    "BanStats",
    "BanStatus",
    "CacheEntry",
    "FetchOutcome",
    "FetchPolicy",
    "FetchResult",
    "PriceHistory",
    "TarkovPayload",
]
