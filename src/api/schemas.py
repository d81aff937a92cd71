"""Pydantic response schemas for the Tarkov Search API.

Every endpoint answers with the same envelope: ``success`` plus either
``data`` or ``error``.  List endpoints add ``count``; admin endpoints add
``message`` and the outcome of the invalidation.  Degraded results still
carry ``success: true`` and explain themselves through ``data.note``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ApiResponse(BaseModel):
    """Successful response envelope."""

    success: bool = True
    data: Any = None
    count: int | None = Field(default=None, description="Number of items for list endpoints")


class ErrorResponse(BaseModel):
    """Standard error response body."""

    success: bool = False
    error: str
    path: str | None = None
    method: str | None = None


class HealthResponse(BaseModel):
    """Application health check response."""

    status: str
    timestamp: str
    uptime: float = Field(description="Seconds since application start")
    cache_entries: int = Field(default=0, alias="cacheEntries")

    model_config = ConfigDict(populate_by_name=True)


class CacheClearResponse(BaseModel):
    """Result of clearing the whole cache."""

    success: bool = True
    message: str
    removed: int


class CacheKeyClearResponse(BaseModel):
    """Result of clearing a single cache key."""

    success: bool = True
    message: str
    existed: bool
