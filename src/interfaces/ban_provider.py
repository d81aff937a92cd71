"""Abstract base classes for the auxiliary ban and marketplace services.

These services feed non-critical aggregate data.  Implementations raise on
any failure; callers wrap them in the resilient fetch gateway so a failure
becomes a degraded result instead of an error response.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from src.models.tarkov import BanStats, BanStatus, PriceHistory


class IBanProvider(ABC):
    """Contract for ban status and ban statistics lookups."""

    @abstractmethod
    async def check_ban(self, username: str) -> BanStatus:
        """Return the ban status reported for *username*."""

    @abstractmethod
    async def ban_stats(self) -> BanStats:
        """Return global ban statistics."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Short identifier used in logs and errors."""


class IPriceHistoryProvider(ABC):
    """Contract for flea-market price history lookups."""

    @abstractmethod
    async def price_history(self, item_id: str, days: int) -> PriceHistory:
        """Return price points for *item_id* over the last *days* days."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Short identifier used in logs and errors."""
