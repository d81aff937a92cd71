"""Flea-market price history from the Tarkov market REST API."""

from __future__ import annotations

from urllib.parse import quote

import httpx

from src.interfaces.ban_provider import IPriceHistoryProvider
from src.models.tarkov import PriceHistory
from src.providers.tarkov.http_helpers import get_json_object

_DEFAULT_BASE_URL = "https://api.tarkov.dev"
_DEFAULT_TIMEOUT = 10.0


class PriceHistoryProvider(IPriceHistoryProvider):
    """Fetches ``{FLEA_MARKET_API}/item/{id}/history?days=``.

    Parameters
    ----------
    http_client:
        Injected ``httpx.AsyncClient``.
    base_url:
        Market API root.
    timeout:
        Per-request timeout in seconds.
    """

    _PROVIDER_NAME = "flea_market"

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        base_url: str = _DEFAULT_BASE_URL,
        timeout: float = _DEFAULT_TIMEOUT,
    ) -> None:
        self._http = http_client
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    def get_provider_name(self) -> str:
        return self._PROVIDER_NAME

    async def price_history(self, item_id: str, days: int) -> PriceHistory:
        body = await get_json_object(
            self._http,
            f"{self._base_url}/item/{quote(item_id, safe='')}/history",
            params={"days": days},
            provider_name=self._PROVIDER_NAME,
            timeout=self._timeout,
        )
        return PriceHistory(
            item_id=item_id,
            data=body.get("history") or [],
            min=body.get("minPrice") or 0,
            max=body.get("maxPrice") or 0,
            average=body.get("averagePrice") or 0,
        )
