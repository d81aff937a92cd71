"""FastAPI routes for the Tarkov Search API.

# Endpoint                              Method  Policy  Description
# ─────────────────────────────────────────────────────────────────────
# /api/health                           GET     -       Health check
# /api/player/search?username=          GET     hard    Player by username
# /api/player/{player_id}               GET     hard    Player profile
# /api/ban-check?username=              GET     soft    Player ban status
# /api/ban-stats                        GET     soft    Global ban statistics
# /api/market/search?query=             GET     hard    Item search
# /api/market/item/{item_id}            GET     hard    Item price data
# /api/market/trending?limit=           GET     hard    Trending items
# /api/market/history/{item_id}?days=   GET     soft    Price history
# /api/admin/cache/clear                POST    admin   Clear whole cache
# /api/admin/cache/clear/{key}          POST    admin   Clear one cache key

Routes validate input, delegate to :class:`TarkovService` or
:class:`AdminControl` resolved from ``app.state``, and wrap the result in
the response envelope.  Failures are raised as ``TarkovSearchError``
subclasses and rendered by the error-handling middleware.
"""

from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Header, Query, Request

from src.api.schemas import (
    ApiResponse,
    CacheClearResponse,
    CacheKeyClearResponse,
    HealthResponse,
)
from src.services.admin_control import AdminControl
from src.services.tarkov_service import TarkovService
from src.utils.validators import (
    parse_trending_limit,
    require_identifier,
    require_search_query,
    require_username,
)


router = APIRouter(prefix="/api")


# ---------------------------------------------------------------------------
# Dependency injection helpers -- resolve singletons from app.state
# ---------------------------------------------------------------------------


def _get_tarkov_service(request: Request) -> TarkovService:
    """Return the Tarkov lookup service from application state."""
    return request.app.state.tarkov_service


def _get_admin_control(request: Request) -> AdminControl:
    """Return the admin cache control from application state."""
    return request.app.state.admin_control


TarkovServiceDep = Annotated[TarkovService, Depends(_get_tarkov_service)]
AdminControlDep = Annotated[AdminControl, Depends(_get_admin_control)]
AdminKeyHeader = Annotated[str | None, Header(alias="X-Admin-Key")]


def _envelope(data: Any, count: int | None = None) -> dict[str, Any]:
    body = ApiResponse(data=data, count=count).model_dump()
    if count is None:
        body.pop("count")
    return body


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


@router.get("/health", response_model=HealthResponse, summary="Application health check")
async def health_check(request: Request) -> HealthResponse:
    started_at = getattr(request.app.state, "started_at", time.monotonic())
    cache = getattr(request.app.state, "cache", None)
    return HealthResponse(
        status="ok",
        timestamp=datetime.now(timezone.utc).isoformat(),
        uptime=round(time.monotonic() - started_at, 3),
        cache_entries=len(cache) if cache is not None else 0,
    )


# ---------------------------------------------------------------------------
# Players
# ---------------------------------------------------------------------------


@router.get("/player/search", summary="Search for a player by username")
async def search_player(
    service: TarkovServiceDep,
    username: str | None = None,
) -> dict[str, Any]:
    username = require_username(username)
    return _envelope(await service.search_player(username))


@router.get("/player/{player_id}", summary="Get a player's profile")
async def get_player(player_id: str, service: TarkovServiceDep) -> dict[str, Any]:
    player_id = require_identifier(player_id, "Player id")
    return _envelope(await service.get_player(player_id))


# ---------------------------------------------------------------------------
# Bans
# ---------------------------------------------------------------------------


@router.get("/ban-check", summary="Check whether a player is banned")
async def ban_check(
    service: TarkovServiceDep,
    username: str | None = None,
) -> dict[str, Any]:
    username = require_username(username, detailed=False)
    status = await service.check_ban(username)
    return _envelope(status.to_payload())


@router.get("/ban-stats", summary="Global ban statistics")
async def ban_stats(service: TarkovServiceDep) -> dict[str, Any]:
    stats = await service.ban_stats()
    return _envelope(stats.to_payload())


# ---------------------------------------------------------------------------
# Flea market
# ---------------------------------------------------------------------------


@router.get("/market/search", summary="Search flea-market items by name")
async def market_search(
    service: TarkovServiceDep,
    query: str | None = None,
) -> dict[str, Any]:
    query = require_search_query(query)
    items = await service.search_items(query)
    return _envelope(items, count=len(items))


@router.get("/market/item/{item_id}", summary="Get price data for an item")
async def market_item(item_id: str, service: TarkovServiceDep) -> dict[str, Any]:
    item_id = require_identifier(item_id, "Item id")
    return _envelope(await service.get_item(item_id))


@router.get("/market/trending", summary="Trending flea-market items")
async def market_trending(
    service: TarkovServiceDep,
    limit: str | None = None,
) -> dict[str, Any]:
    items = await service.trending_items(parse_trending_limit(limit))
    return _envelope(items, count=len(items))


@router.get("/market/history/{item_id}", summary="Price history for an item")
async def market_history(
    item_id: str,
    service: TarkovServiceDep,
    days: Annotated[int, Query(ge=1, le=365)] = 30,
) -> dict[str, Any]:
    item_id = require_identifier(item_id, "Item id")
    history = await service.price_history(item_id, days)
    return _envelope(history.to_payload())


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------


@router.post(
    "/admin/cache/clear",
    response_model=CacheClearResponse,
    summary="Clear the whole cache (requires X-Admin-Key)",
)
async def clear_cache(
    admin: AdminControlDep,
    x_admin_key: AdminKeyHeader = None,
) -> CacheClearResponse:
    removed = admin.clear_all(x_admin_key)
    return CacheClearResponse(
        message=f"Cache cleared. {removed} entries removed.",
        removed=removed,
    )


@router.post(
    "/admin/cache/clear/{key:path}",
    response_model=CacheKeyClearResponse,
    summary="Clear one cache key (requires X-Admin-Key)",
)
async def clear_cache_key(
    key: str,
    admin: AdminControlDep,
    x_admin_key: AdminKeyHeader = None,
) -> CacheKeyClearResponse:
    existed = admin.clear_key(x_admin_key, key)
    return CacheKeyClearResponse(
        message=f"Cache key '{key}' cleared.",
        existed=existed,
    )
