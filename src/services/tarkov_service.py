"""Tarkov lookups composed from the cache handler, gateway and providers.

Every public method follows the same shape: build the request's cache key,
pick the TTL of its key class, and resolve through the
:class:`CacheCoordinatedHandler` with a producer that calls upstream through
a :class:`ResilientFetchGateway` under the call site's policy.

Hard path (identity lookups) -- an upstream failure raises ``UpstreamError``
and a reported absence raises ``NotFoundError``:
    search_player, get_player, search_items, get_item, trending_items

Soft path (auxiliary aggregates) -- an upstream failure yields a degraded
value that still reports success:
    check_ban, ban_stats, price_history

The handler caches the tagged :class:`FetchResult`, so not-found and
degraded outcomes are reused for the key class TTL just like successes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable

import structlog

from src.config.settings import Settings
from src.interfaces.ban_provider import IBanProvider, IPriceHistoryProvider
from src.interfaces.game_data_provider import IGameDataProvider
from src.models.fetch import FetchPolicy, FetchResult
from src.models.tarkov import BanStats, BanStatus, PriceHistory
from src.services.request_handler import CacheCoordinatedHandler
from src.services.resilient_fetch import ResilientFetchGateway
from src.utils import cache_keys
from src.utils.errors import NotFoundError
from src.utils.logging import get_logger


@dataclass(frozen=True)
class CacheTTLs:
    """TTL in seconds for each class of cached request."""

    default: float = 300
    ban_check: float = 900
    ban_stats: float = 3600
    trending: float = 600
    price_history: float = 3600

    @classmethod
    def from_settings(cls, settings: Settings) -> CacheTTLs:
        return cls(
            default=settings.default_cache_ttl,
            ban_check=settings.ban_check_ttl,
            ban_stats=settings.ban_stats_ttl,
            trending=settings.trending_ttl,
            price_history=settings.price_history_ttl,
        )


class TarkovService:
    """Cached, failure-aware access to the Tarkov upstream services.

    Parameters
    ----------
    handler:
        Read-through cache handler shared by every lookup.
    game_data:
        GraphQL game-data provider (players, items, trending).
    bans:
        Ban status / statistics provider.
    price_history:
        Flea-market price history provider.
    ttls:
        TTL per key class.
    """

    def __init__(
        self,
        handler: CacheCoordinatedHandler,
        game_data: IGameDataProvider,
        bans: IBanProvider,
        price_history: IPriceHistoryProvider,
        ttls: CacheTTLs | None = None,
    ) -> None:
        self._handler = handler
        self._game_data = game_data
        self._bans = bans
        self._price_history = price_history
        self._ttls = ttls or CacheTTLs()
        self._game_gateway = ResilientFetchGateway(game_data.get_provider_name())
        self._ban_gateway = ResilientFetchGateway(bans.get_provider_name())
        self._history_gateway = ResilientFetchGateway(price_history.get_provider_name())
        self._logger: structlog.BoundLogger = get_logger(__name__)

    @property
    def ttls(self) -> CacheTTLs:
        return self._ttls

    # ------------------------------------------------------------------
    # Hard path: players and items
    # ------------------------------------------------------------------

    async def search_player(self, username: str) -> dict[str, Any]:
        result = await self._resolve_hard(
            cache_keys.player_search_key(username),
            self._ttls.default,
            lambda: self._game_data.search_player(username),
        )
        return self._found(result, "Player not found")

    async def get_player(self, player_id: str) -> dict[str, Any]:
        result = await self._resolve_hard(
            cache_keys.player_profile_key(player_id),
            self._ttls.default,
            lambda: self._game_data.get_player(player_id),
        )
        return self._found(result, "Player profile not found")

    async def search_items(self, query: str) -> list[dict[str, Any]]:
        result = await self._resolve_hard(
            cache_keys.market_search_key(query),
            self._ttls.default,
            lambda: self._game_data.search_items(query),
        )
        return result.value or []

    async def get_item(self, item_id: str) -> dict[str, Any]:
        result = await self._resolve_hard(
            cache_keys.market_item_key(item_id),
            self._ttls.default,
            lambda: self._game_data.get_item(item_id),
        )
        return self._found(result, "Item not found")

    async def trending_items(self, limit: int) -> list[dict[str, Any]]:
        result = await self._resolve_hard(
            cache_keys.market_trending_key(limit),
            self._ttls.trending,
            lambda: self._game_data.trending_items(limit),
        )
        return result.value or []

    # ------------------------------------------------------------------
    # Soft path: ban data and price history
    # ------------------------------------------------------------------

    async def check_ban(self, username: str) -> BanStatus:
        result = await self._handler.resolve(
            cache_keys.ban_check_key(username),
            self._ttls.ban_check,
            lambda: self._ban_gateway.fetch(
                lambda: self._bans.check_ban(username),
                FetchPolicy.SOFT,
                lambda: BanStatus.offline(username),
            ),
        )
        return result.value

    async def ban_stats(self) -> BanStats:
        result = await self._handler.resolve(
            cache_keys.ban_stats_key(),
            self._ttls.ban_stats,
            lambda: self._ban_gateway.fetch(
                self._bans.ban_stats,
                FetchPolicy.SOFT,
                BanStats.unavailable,
            ),
        )
        return result.value

    async def price_history(self, item_id: str, days: int) -> PriceHistory:
        result = await self._handler.resolve(
            cache_keys.market_history_key(item_id, days),
            self._ttls.price_history,
            lambda: self._history_gateway.fetch(
                lambda: self._price_history.price_history(item_id, days),
                FetchPolicy.SOFT,
                lambda: PriceHistory.unavailable(item_id),
            ),
        )
        return result.value

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _resolve_hard(
        self,
        key: str,
        ttl: float,
        call: Callable[[], Awaitable[Any]],
    ) -> FetchResult[Any]:
        return await self._handler.resolve(
            key,
            ttl,
            lambda: self._game_gateway.fetch(call, FetchPolicy.HARD),
        )

    def _found(self, result: FetchResult[Any], message: str) -> Any:
        if result.is_not_found:
            self._logger.info("upstream_not_found", message=message)
            raise NotFoundError(message, provider_name=self._game_gateway.provider_name)
        return result.value
