"""Abstract base class for the structured game-data query service.

The game-data service answers player and item lookups.  Implementations
return ``None`` when the service affirmatively reports that the entity does
not exist and raise :class:`~src.utils.errors.UpstreamError` for every other
failure (timeouts, transport errors, explicit error envelopes).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class IGameDataProvider(ABC):
    """Contract for player and item lookups."""

    @abstractmethod
    async def search_player(self, username: str) -> dict[str, Any] | None:
        """Look up a player by exact username."""

    @abstractmethod
    async def get_player(self, player_id: str) -> dict[str, Any] | None:
        """Fetch a player's profile and statistics by id."""

    @abstractmethod
    async def search_items(self, name: str) -> list[dict[str, Any]]:
        """Search items by name; an empty list when nothing matches."""

    @abstractmethod
    async def get_item(self, item_id: str) -> dict[str, Any] | None:
        """Fetch an item's price and trader data by id."""

    @abstractmethod
    async def trending_items(self, limit: int) -> list[dict[str, Any]]:
        """Return up to *limit* trending flea-market items."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Short identifier used in logs and errors."""
