"""Tarkov Search API FastAPI application entry point.

Wires the caching-and-resilience core (cache store, request handler, rate
limiter, admin control) and the upstream providers together, stores them on
``app.state`` for the routes' dependency helpers, and configures structured
logging and middleware.

Core components are created in :func:`create_app` because the rate-limit
middleware needs its limiter at construction time.  Components that own
network resources (the shared ``httpx.AsyncClient`` and the providers built
on it) are created in the lifespan and closed on shutdown.
"""

from __future__ import annotations

import time
from contextlib import asynccontextmanager
from typing import Any

import httpx
import structlog
import uvicorn
from fastapi import FastAPI

from src.api.middleware import (
    ErrorHandlingMiddleware,
    RateLimitMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
    configure_exception_handlers,
)
from src.api.routes import router as api_router
from src.config.settings import Settings
from src.providers.cache.memory_cache import MemoryCacheProvider
from src.providers.tarkov.ban_check_provider import BanCheckProvider
from src.providers.tarkov.graphql_provider import TarkovGraphQLProvider
from src.providers.tarkov.price_history_provider import PriceHistoryProvider
from src.services.admin_control import AdminControl
from src.services.rate_limiter import SlidingWindowRateLimiter
from src.services.request_handler import CacheCoordinatedHandler
from src.services.tarkov_service import CacheTTLs, TarkovService
from src.utils.logging import configure_logging, get_logger

_VERSION = "1.0.0"

settings = Settings()

configure_logging(
    log_level=settings.log_level,
    json_output=(settings.app_env == "production"),
)
_logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Component assembly
# ---------------------------------------------------------------------------


def build_core(app_settings: Settings) -> dict[str, Any]:
    """Construct the process-local cache, handler, limiter and admin gate."""
    cache = MemoryCacheProvider(max_size=app_settings.cache_max_entries)
    handler = CacheCoordinatedHandler(cache, coalesce=app_settings.coalesce_requests)
    rate_limiter = SlidingWindowRateLimiter(
        limit=app_settings.rate_limit_max_requests,
        window_seconds=app_settings.rate_limit_window_seconds,
        max_clients=app_settings.rate_limit_max_clients,
    )
    admin_control = AdminControl(cache, app_settings.admin_key)
    return {
        "cache": cache,
        "handler": handler,
        "rate_limiter": rate_limiter,
        "admin_control": admin_control,
    }


def build_upstream(
    app_settings: Settings,
    handler: CacheCoordinatedHandler,
    http_client: httpx.AsyncClient,
) -> dict[str, Any]:
    """Construct the upstream providers and the service composed from them."""
    game_data = TarkovGraphQLProvider(
        http_client=http_client,
        endpoint=app_settings.tarkov_api_base,
        timeout=app_settings.graphql_timeout,
    )
    bans = BanCheckProvider(
        http_client=http_client,
        base_url=app_settings.ban_check_api,
        timeout=app_settings.ban_check_timeout,
    )
    price_history = PriceHistoryProvider(
        http_client=http_client,
        base_url=app_settings.flea_market_api,
        timeout=app_settings.price_history_timeout,
    )
    tarkov_service = TarkovService(
        handler=handler,
        game_data=game_data,
        bans=bans,
        price_history=price_history,
        ttls=CacheTTLs.from_settings(app_settings),
    )
    return {"http_client": http_client, "tarkov_service": tarkov_service}


# ---------------------------------------------------------------------------
# Application lifespan (startup / shutdown)
# ---------------------------------------------------------------------------


@asynccontextmanager
async def _lifespan(application: FastAPI):  # noqa: ANN201
    """Create the shared HTTP client and providers; close the client on shutdown."""
    app_settings: Settings = application.state.settings
    http_client = httpx.AsyncClient(timeout=app_settings.graphql_timeout)
    components = build_upstream(app_settings, application.state.handler, http_client)

    for key, value in components.items():
        setattr(application.state, key, value)
    application.state.started_at = time.monotonic()

    if app_settings.uses_default_admin_key():
        _logger.warning("admin_key_default", message="ADMIN_KEY is not set; using the default key")

    _logger.info(
        "app_startup",
        version=_VERSION,
        environment=app_settings.app_env,
        api_base=app_settings.tarkov_api_base,
        coalesce_requests=app_settings.coalesce_requests,
    )

    yield

    await http_client.aclose()
    _logger.info("app_shutdown", message="HTTP client closed")


# ---------------------------------------------------------------------------
# FastAPI application factory
# ---------------------------------------------------------------------------


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Build and configure the FastAPI application."""
    app_settings = app_settings or settings
    application = FastAPI(
        title="Tarkov Search API",
        version=_VERSION,
        description=(
            "Player search, ban checks and flea-market prices for Escape from "
            "Tarkov, served from a TTL cache in front of rate-limited upstream "
            "providers."
        ),
        lifespan=_lifespan,
    )

    core = build_core(app_settings)
    application.state.settings = app_settings
    application.state.started_at = time.monotonic()
    for key, value in core.items():
        setattr(application.state, key, value)

    # -- Middleware (order matters: last added = first executed) --
    application.add_middleware(
        ErrorHandlingMiddleware,
        expose_details=(app_settings.app_env == "development"),
    )
    application.add_middleware(RateLimitMiddleware, limiter=core["rate_limiter"])
    application.add_middleware(RequestLoggingMiddleware)
    configure_cors(application, allowed_origins=app_settings.cors_origins)
    configure_exception_handlers(application)

    application.include_router(api_router)

    return application


app = create_app()

# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    uvicorn.run(
        "src.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=(settings.app_env == "development"),
    )
