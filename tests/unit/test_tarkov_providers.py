"""Unit tests for the Tarkov upstream providers -- mocked HTTP calls."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from src.models.tarkov import BanStats, BanStatus, PriceHistory
from src.providers.tarkov.ban_check_provider import BanCheckProvider
from src.providers.tarkov.graphql_provider import TarkovGraphQLProvider
from src.providers.tarkov.price_history_provider import PriceHistoryProvider
from src.utils.errors import UpstreamError


def _response(status_code: int = 200, payload: object = None) -> MagicMock:
    mock_response = MagicMock()
    mock_response.status_code = status_code
    mock_response.json.return_value = payload
    return mock_response


def _client(method: str, *, response: MagicMock | None = None, error: Exception | None = None):
    mock_client = AsyncMock()
    call = AsyncMock(return_value=response) if error is None else AsyncMock(side_effect=error)
    setattr(mock_client, method, call)
    return mock_client


# ======================================================================
# TarkovGraphQLProvider
# ======================================================================


class TestTarkovGraphQLProvider:
    def test_provider_name(self) -> None:
        provider = TarkovGraphQLProvider(http_client=AsyncMock())
        assert provider.get_provider_name() == "tarkov_graphql"

    @pytest.mark.asyncio
    async def test_search_player_returns_player(self) -> None:
        player = {"id": "p-1", "username": "PlayerOne", "level": 30}
        mock_client = _client(
            "post", response=_response(payload={"data": {"playerByUsername": player}})
        )
        provider = TarkovGraphQLProvider(
            http_client=mock_client, endpoint="https://example.test/graphql", timeout=5
        )

        result = await provider.search_player("PlayerOne")

        assert result == player
        args, kwargs = mock_client.post.call_args
        assert args[0] == "https://example.test/graphql"
        assert kwargs["json"]["variables"] == {"username": "PlayerOne"}
        assert "playerByUsername" in kwargs["json"]["query"]
        assert kwargs["timeout"] == 5

    @pytest.mark.asyncio
    async def test_null_field_means_not_found(self) -> None:
        mock_client = _client("post", response=_response(payload={"data": {"item": None}}))
        provider = TarkovGraphQLProvider(http_client=mock_client)

        assert await provider.get_item("missing") is None

    @pytest.mark.asyncio
    async def test_get_player_sends_id(self) -> None:
        mock_client = _client(
            "post", response=_response(payload={"data": {"player": {"id": "p-9"}}})
        )
        provider = TarkovGraphQLProvider(http_client=mock_client)

        assert await provider.get_player("p-9") == {"id": "p-9"}
        assert mock_client.post.call_args.kwargs["json"]["variables"] == {"id": "p-9"}

    @pytest.mark.asyncio
    async def test_search_items_null_becomes_empty_list(self) -> None:
        mock_client = _client(
            "post", response=_response(payload={"data": {"itemsByName": None}})
        )
        provider = TarkovGraphQLProvider(http_client=mock_client)

        assert await provider.search_items("zz") == []

    @pytest.mark.asyncio
    async def test_trending_items_passes_limit(self) -> None:
        items = [{"id": "a"}, {"id": "b"}]
        mock_client = _client(
            "post", response=_response(payload={"data": {"trendingItems": items}})
        )
        provider = TarkovGraphQLProvider(http_client=mock_client)

        assert await provider.trending_items(2) == items
        assert mock_client.post.call_args.kwargs["json"]["variables"] == {"limit": 2}

    @pytest.mark.asyncio
    async def test_graphql_errors_raise_with_first_message(self) -> None:
        payload = {"errors": [{"message": "Syntax Error"}, {"message": "other"}], "data": None}
        mock_client = _client("post", response=_response(payload=payload))
        provider = TarkovGraphQLProvider(http_client=mock_client)

        with pytest.raises(UpstreamError) as exc_info:
            await provider.search_player("PlayerOne")

        assert exc_info.value.message == "Syntax Error"
        assert exc_info.value.provider_name == "tarkov_graphql"

    @pytest.mark.asyncio
    async def test_graphql_errors_without_message_use_fallback(self) -> None:
        mock_client = _client("post", response=_response(payload={"errors": [{}]}))
        provider = TarkovGraphQLProvider(http_client=mock_client)

        with pytest.raises(UpstreamError, match="Failed to fetch item data"):
            await provider.get_item("abc")

    @pytest.mark.asyncio
    async def test_empty_errors_list_is_still_a_failure(self) -> None:
        payload = {"errors": [], "data": {"item": {"id": "abc"}}}
        mock_client = _client("post", response=_response(payload=payload))
        provider = TarkovGraphQLProvider(http_client=mock_client)

        with pytest.raises(UpstreamError) as exc_info:
            await provider.get_item("abc")

        assert exc_info.value.message == "Failed to fetch item data"

    @pytest.mark.asyncio
    async def test_http_error_status(self) -> None:
        mock_client = _client("post", response=_response(status_code=502))
        provider = TarkovGraphQLProvider(http_client=mock_client)

        with pytest.raises(UpstreamError) as exc_info:
            await provider.search_player("PlayerOne")

        assert exc_info.value.message == "Failed to fetch player data: HTTP 502"

    @pytest.mark.asyncio
    async def test_timeout(self) -> None:
        mock_client = _client("post", error=httpx.ReadTimeout("timed out"))
        provider = TarkovGraphQLProvider(http_client=mock_client)

        with pytest.raises(UpstreamError) as exc_info:
            await provider.trending_items(20)

        assert exc_info.value.message == "Failed to fetch trending items: request timed out"
        assert mock_client.post.await_count == 1

    @pytest.mark.asyncio
    async def test_connection_error(self) -> None:
        mock_client = _client("post", error=httpx.ConnectError("refused"))
        provider = TarkovGraphQLProvider(http_client=mock_client)

        with pytest.raises(UpstreamError, match="Failed to search items: refused"):
            await provider.search_items("ammo")

    @pytest.mark.asyncio
    async def test_malformed_json(self) -> None:
        response = _response()
        response.json.side_effect = ValueError("not json")
        provider = TarkovGraphQLProvider(http_client=_client("post", response=response))

        with pytest.raises(UpstreamError, match="malformed response"):
            await provider.get_player("p-1")

    @pytest.mark.asyncio
    async def test_missing_data_envelope(self) -> None:
        provider = TarkovGraphQLProvider(
            http_client=_client("post", response=_response(payload={"unexpected": True}))
        )

        with pytest.raises(UpstreamError, match="response has no data"):
            await provider.get_player("p-1")


# ======================================================================
# BanCheckProvider
# ======================================================================


class TestBanCheckProvider:
    @pytest.mark.asyncio
    async def test_check_ban_maps_fields(self) -> None:
        payload = {
            "banned": True,
            "reason": "Cheating",
            "bannedAt": "2026-09-01T00:00:00Z",
            "banType": "hwid",
            "source": "battlestate",
        }
        mock_client = _client("get", response=_response(payload=payload))
        provider = BanCheckProvider(
            http_client=mock_client, base_url="https://bans.test/api/", timeout=8
        )

        status = await provider.check_ban("Cheater1")

        assert isinstance(status, BanStatus)
        assert status.username == "Cheater1"
        assert status.is_banned is True
        assert status.ban_reason == "Cheating"
        assert status.ban_date == "2026-09-01T00:00:00Z"
        assert status.ban_type == "hwid"
        assert status.source == "battlestate"
        assert status.is_degraded is False
        args, kwargs = mock_client.get.call_args
        assert args[0] == "https://bans.test/api/check"
        assert kwargs["params"] == {"username": "Cheater1"}
        assert kwargs["timeout"] == 8

    @pytest.mark.asyncio
    async def test_check_ban_defaults_for_missing_fields(self) -> None:
        provider = BanCheckProvider(http_client=_client("get", response=_response(payload={})))

        status = await provider.check_ban("CleanPlayer")

        assert status.is_banned is False
        assert status.ban_reason is None
        assert status.ban_date is None
        assert status.ban_type == "unknown"
        assert status.source == "unknown"

    @pytest.mark.asyncio
    async def test_truthy_non_boolean_banned_is_not_banned(self) -> None:
        provider = BanCheckProvider(
            http_client=_client("get", response=_response(payload={"banned": "yes"}))
        )
        status = await provider.check_ban("PlayerOne")
        assert status.is_banned is False

    @pytest.mark.asyncio
    async def test_ban_stats_maps_fields(self) -> None:
        payload = {
            "totalBans": 1200,
            "activeHwidBans": 200,
            "activeAccountBans": 900,
            "temporaryBans": None,
            "sources": ["battlestate"],
        }
        mock_client = _client("get", response=_response(payload=payload))
        provider = BanCheckProvider(http_client=mock_client, base_url="https://bans.test")

        stats = await provider.ban_stats()

        assert isinstance(stats, BanStats)
        assert stats.total_bans == 1200
        assert stats.active_hwid_bans == 200
        assert stats.active_account_bans == 900
        assert stats.temporary_bans == 0
        assert stats.sources == ["battlestate"]
        assert mock_client.get.call_args.args[0] == "https://bans.test/stats"

    @pytest.mark.asyncio
    async def test_timeout_raises_upstream_error(self) -> None:
        provider = BanCheckProvider(
            http_client=_client("get", error=httpx.ConnectTimeout("timed out"))
        )

        with pytest.raises(UpstreamError) as exc_info:
            await provider.check_ban("PlayerOne")

        assert exc_info.value.message == "Request timed out"
        assert exc_info.value.provider_name == "ban_check"

    @pytest.mark.asyncio
    async def test_http_error_status(self) -> None:
        provider = BanCheckProvider(http_client=_client("get", response=_response(503)))

        with pytest.raises(UpstreamError, match="HTTP 503"):
            await provider.ban_stats()

    @pytest.mark.asyncio
    async def test_non_object_body_is_malformed(self) -> None:
        provider = BanCheckProvider(
            http_client=_client("get", response=_response(payload=["not", "an", "object"]))
        )

        with pytest.raises(UpstreamError, match="Malformed response"):
            await provider.check_ban("PlayerOne")


# ======================================================================
# PriceHistoryProvider
# ======================================================================


class TestPriceHistoryProvider:
    @pytest.mark.asyncio
    async def test_price_history_maps_fields(self) -> None:
        payload = {
            "history": [{"price": 10}, {"price": 20}],
            "minPrice": 10,
            "maxPrice": 20,
            "averagePrice": 15.5,
        }
        mock_client = _client("get", response=_response(payload=payload))
        provider = PriceHistoryProvider(http_client=mock_client, base_url="https://market.test")

        history = await provider.price_history("abc123", 7)

        assert isinstance(history, PriceHistory)
        assert history.item_id == "abc123"
        assert history.data == [{"price": 10}, {"price": 20}]
        assert history.min == 10
        assert history.max == 20
        assert history.average == 15.5
        args, kwargs = mock_client.get.call_args
        assert args[0] == "https://market.test/item/abc123/history"
        assert kwargs["params"] == {"days": 7}

    @pytest.mark.asyncio
    async def test_item_id_is_path_escaped(self) -> None:
        mock_client = _client("get", response=_response(payload={}))
        provider = PriceHistoryProvider(http_client=mock_client, base_url="https://market.test")

        await provider.price_history("a/b c", 30)

        assert mock_client.get.call_args.args[0] == "https://market.test/item/a%2Fb%20c/history"

    @pytest.mark.asyncio
    async def test_empty_body_gives_zero_summary(self) -> None:
        provider = PriceHistoryProvider(http_client=_client("get", response=_response(payload={})))

        history = await provider.price_history("abc", 30)

        assert history.data == []
        assert (history.min, history.max, history.average) == (0, 0, 0)

    @pytest.mark.asyncio
    async def test_failure_raises(self) -> None:
        provider = PriceHistoryProvider(
            http_client=_client("get", error=httpx.ConnectError("refused"))
        )

        with pytest.raises(UpstreamError) as exc_info:
            await provider.price_history("abc", 30)

        assert exc_info.value.message == "Request failed: refused"
        assert exc_info.value.provider_name == "flea_market"
