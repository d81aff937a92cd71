"""Tarkov game-data provider backed by the public GraphQL API.

Issues POST requests to the configured GraphQL endpoint (``TARKOV_API_BASE``)
through an injected ``httpx.AsyncClient``.  Each request carries a fixed
timeout and is attempted exactly once.

Outcomes:

- a populated result field is returned as plain dicts/lists,
- a ``null`` result field means the entity does not exist (``None``),
- an ``errors`` key (even an empty list), a transport failure, a non-2xx
  status or a body that is not a GraphQL envelope raises :class:`UpstreamError`.
"""

from __future__ import annotations

from typing import Any

import httpx

from src.interfaces.game_data_provider import IGameDataProvider
from src.utils.errors import UpstreamError
from src.utils.logging import get_logger

_DEFAULT_ENDPOINT = "https://api.tarkov.dev/graphql"
_DEFAULT_TIMEOUT = 10.0

_SEARCH_PLAYER_QUERY = """
query SearchPlayer($username: String!) {
  playerByUsername(username: $username) {
    id
    username
    level
    experience
    lastOnline
    registeredAt
    wipe
  }
}
"""

_GET_PLAYER_QUERY = """
query GetPlayer($id: ID!) {
  player(id: $id) {
    id
    username
    level
    experience
    stats {
      eft {
        all {
          kills
          deaths
          kd
          playtime
          survivedRaids
          failedRaids
          headshots
          losses
          earnings
        }
      }
    }
    lastOnline
    registeredAt
  }
}
"""

_SEARCH_ITEMS_QUERY = """
query SearchItems($name: String!) {
  itemsByName(name: $name) {
    id
    name
    shortName
    basePrice
    wikiLink
    icon
    image
  }
}
"""

_GET_ITEM_QUERY = """
query GetItem($id: ID!) {
  item(id: $id) {
    id
    name
    shortName
    basePrice
    averagePrice
    lastLowPrice
    lastOfferCount
    updated
    wikiLink
    icon
    image
    sellFor {
      vendor {
        name
        price
        currency
      }
    }
    buyFor {
      vendor {
        name
        price
        currency
        level
      }
    }
  }
}
"""

_TRENDING_ITEMS_QUERY = """
query TrendingItems($limit: Int!) {
  trendingItems(limit: $limit) {
    id
    name
    shortName
    basePrice
    lastLowPrice
    lastOfferCount
    priceChange
    priceChangePercent
    updated
    icon
  }
}
"""


class TarkovGraphQLProvider(IGameDataProvider):
    """Player and item lookups against the Tarkov GraphQL API.

    Parameters
    ----------
    http_client:
        Injected ``httpx.AsyncClient`` for testability and connection pooling.
    endpoint:
        GraphQL endpoint URL.
    timeout:
        Per-request timeout in seconds.
    """

    _PROVIDER_NAME = "tarkov_graphql"

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        endpoint: str = _DEFAULT_ENDPOINT,
        timeout: float = _DEFAULT_TIMEOUT,
    ) -> None:
        self._http = http_client
        self._endpoint = endpoint
        self._timeout = timeout
        self._logger = get_logger(__name__)

    def get_provider_name(self) -> str:
        return self._PROVIDER_NAME

    # ------------------------------------------------------------------
    # IGameDataProvider implementation
    # ------------------------------------------------------------------

    async def search_player(self, username: str) -> dict[str, Any] | None:
        return await self._query(
            _SEARCH_PLAYER_QUERY,
            {"username": username},
            field="playerByUsername",
            failure_message="Failed to fetch player data",
        )

    async def get_player(self, player_id: str) -> dict[str, Any] | None:
        return await self._query(
            _GET_PLAYER_QUERY,
            {"id": player_id},
            field="player",
            failure_message="Failed to fetch player profile",
        )

    async def search_items(self, name: str) -> list[dict[str, Any]]:
        items = await self._query(
            _SEARCH_ITEMS_QUERY,
            {"name": name},
            field="itemsByName",
            failure_message="Failed to search items",
        )
        return items or []

    async def get_item(self, item_id: str) -> dict[str, Any] | None:
        return await self._query(
            _GET_ITEM_QUERY,
            {"id": item_id},
            field="item",
            failure_message="Failed to fetch item data",
        )

    async def trending_items(self, limit: int) -> list[dict[str, Any]]:
        items = await self._query(
            _TRENDING_ITEMS_QUERY,
            {"limit": limit},
            field="trendingItems",
            failure_message="Failed to fetch trending items",
        )
        return items or []

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _query(
        self,
        query: str,
        variables: dict[str, Any],
        field: str,
        failure_message: str,
    ) -> Any:
        """POST one GraphQL operation and return ``data[field]``."""
        try:
            response = await self._http.post(
                self._endpoint,
                json={"query": query, "variables": variables},
                timeout=self._timeout,
            )
        except httpx.TimeoutException as exc:
            raise UpstreamError(
                message=f"{failure_message}: request timed out",
                provider_name=self._PROVIDER_NAME,
            ) from exc
        except httpx.HTTPError as exc:
            raise UpstreamError(
                message=f"{failure_message}: {exc}",
                provider_name=self._PROVIDER_NAME,
            ) from exc

        if response.status_code >= 400:
            self._logger.warning(
                "graphql_http_error",
                status=response.status_code,
                field=field,
            )
            raise UpstreamError(
                message=f"{failure_message}: HTTP {response.status_code}",
                provider_name=self._PROVIDER_NAME,
            )

        try:
            body = response.json()
        except ValueError as exc:
            raise UpstreamError(
                message=f"{failure_message}: malformed response",
                provider_name=self._PROVIDER_NAME,
            ) from exc

        if not isinstance(body, dict):
            raise UpstreamError(
                message=f"{failure_message}: malformed response",
                provider_name=self._PROVIDER_NAME,
            )

        errors = body.get("errors")
        if errors is not None:
            if not isinstance(errors, list):
                errors = [errors]
            self._logger.warning("graphql_errors", errors=errors[:3], field=field)
            first = errors[0] if errors else None
            message = first.get("message") if isinstance(first, dict) else None
            raise UpstreamError(
                message=message or failure_message,
                provider_name=self._PROVIDER_NAME,
            )

        data = body.get("data")
        if not isinstance(data, dict):
            raise UpstreamError(
                message=f"{failure_message}: response has no data",
                provider_name=self._PROVIDER_NAME,
            )
        return data.get(field)
