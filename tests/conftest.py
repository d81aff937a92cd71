"""Shared pytest fixtures for the Tarkov Search API test suite."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.interfaces.ban_provider import IBanProvider, IPriceHistoryProvider
from src.interfaces.game_data_provider import IGameDataProvider
from src.models.tarkov import BanStats, BanStatus, PriceHistory
from src.providers.cache.memory_cache import MemoryCacheProvider
from src.services.request_handler import CacheCoordinatedHandler
from src.services.tarkov_service import CacheTTLs, TarkovService

# ---------------------------------------------------------------------------
# Clock
# ---------------------------------------------------------------------------


class FakeClock:
    """Manually advanced clock for TTL and rate-window tests."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> MemoryCacheProvider:
    return MemoryCacheProvider(max_size=100, clock=clock)


@pytest.fixture
def handler(cache: MemoryCacheProvider) -> CacheCoordinatedHandler:
    return CacheCoordinatedHandler(cache)


# ---------------------------------------------------------------------------
# Sample upstream payloads
# ---------------------------------------------------------------------------


SAMPLE_PLAYER: dict[str, Any] = {
    "id": "p-1001",
    "username": "Killa_Main",
    "level": 42,
    "experience": 4_200_000,
    "lastOnline": "2026-10-15T20:00:00Z",
    "registeredAt": "2019-01-01T00:00:00Z",
    "wipe": 12,
}

SAMPLE_ITEM: dict[str, Any] = {
    "id": "5449016a4bdc2d6f028b456f",
    "name": "Roubles",
    "shortName": "RUB",
    "basePrice": 1,
    "averagePrice": 1,
    "lastLowPrice": None,
    "lastOfferCount": 0,
    "updated": "2026-10-16T08:00:00Z",
    "wikiLink": "https://escapefromtarkov.fandom.com/wiki/Roubles",
    "icon": None,
    "image": None,
    "sellFor": [],
    "buyFor": [],
}


# ---------------------------------------------------------------------------
# Mock provider fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_game_data() -> IGameDataProvider:
    """Mock IGameDataProvider returning sample players and items.

    Override a method's return_value or side_effect for specific tests.
    """
    mock = MagicMock(spec=IGameDataProvider)
    mock.get_provider_name.return_value = "mock-graphql"
    mock.search_player = AsyncMock(return_value=dict(SAMPLE_PLAYER))
    mock.get_player = AsyncMock(return_value=dict(SAMPLE_PLAYER))
    mock.search_items = AsyncMock(return_value=[dict(SAMPLE_ITEM)])
    mock.get_item = AsyncMock(return_value=dict(SAMPLE_ITEM))
    mock.trending_items = AsyncMock(return_value=[dict(SAMPLE_ITEM)])
    return mock


@pytest.fixture
def mock_bans() -> IBanProvider:
    """Mock IBanProvider reporting a clean player and small statistics."""
    mock = MagicMock(spec=IBanProvider)
    mock.get_provider_name.return_value = "mock-bans"
    mock.check_ban = AsyncMock(
        side_effect=lambda username: BanStatus(
            username=username,
            is_banned=False,
            ban_type="unknown",
            source="battlestate",
        )
    )
    mock.ban_stats = AsyncMock(
        return_value=BanStats(
            total_bans=1500,
            active_hwid_bans=300,
            active_account_bans=1100,
            temporary_bans=100,
            sources=["battlestate"],
        )
    )
    return mock


@pytest.fixture
def mock_price_history() -> IPriceHistoryProvider:
    mock = MagicMock(spec=IPriceHistoryProvider)
    mock.get_provider_name.return_value = "mock-flea"
    mock.price_history = AsyncMock(
        side_effect=lambda item_id, days: PriceHistory(
            item_id=item_id,
            data=[{"price": 100, "timestamp": "2026-10-15"}],
            min=90,
            max=110,
            average=100,
        )
    )
    return mock


@pytest.fixture
def tarkov_service(
    handler: CacheCoordinatedHandler,
    mock_game_data: IGameDataProvider,
    mock_bans: IBanProvider,
    mock_price_history: IPriceHistoryProvider,
) -> TarkovService:
    return TarkovService(
        handler=handler,
        game_data=mock_game_data,
        bans=mock_bans,
        price_history=mock_price_history,
        ttls=CacheTTLs(),
    )
