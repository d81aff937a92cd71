"""Tarkov Search API layer -- routes, schemas, and middleware."""

from src.api.middleware import (
    ErrorHandlingMiddleware,
    RateLimitMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
    configure_exception_handlers,
)
from src.api.routes import router
from src.api.schemas import (
    ApiResponse,
    CacheClearResponse,
    CacheKeyClearResponse,
    ErrorResponse,
    HealthResponse,
)

__all__ = [
    "ErrorHandlingMiddleware",
    "RateLimitMiddleware",
    "RequestLoggingMiddleware",
    "configure_cors",
    "configure_exception_handlers",
    "router",
    "ApiResponse",
    "CacheClearResponse",
    "CacheKeyClearResponse",
    "ErrorResponse",
    "HealthResponse",
]
