"""Shared-secret gate in front of cache invalidation."""

from __future__ import annotations

import hmac

import structlog

from src.interfaces.cache_provider import ICacheProvider
from src.utils.errors import ConfigurationError, UnauthorizedError
from src.utils.logging import get_logger


class AdminControl:
    """Whole-store and single-key cache invalidation for administrators.

    Both operations require a credential equal to the configured secret.
    On mismatch an :class:`UnauthorizedError` is raised before the cache is
    touched, and the error carries no hint about whether the key exists.
    """

    def __init__(self, cache: ICacheProvider, secret: str) -> None:
        if not secret:
            raise ConfigurationError("ADMIN_KEY must not be empty")
        self._cache = cache
        self._secret = secret.encode("utf-8")
        self._logger: structlog.BoundLogger = get_logger(__name__)

    def _authorize(self, credential: str | None, action: str) -> None:
        if credential is None or not hmac.compare_digest(
            credential.encode("utf-8"), self._secret
        ):
            self._logger.warning("admin_auth_failed", action=action)
            raise UnauthorizedError()

    def clear_all(self, credential: str | None) -> int:
        """Remove every cache entry and return how many were removed."""
        self._authorize(credential, "clear_all")
        removed = self._cache.invalidate_all()
        self._logger.info("admin_cache_cleared", removed=removed)
        return removed

    def clear_key(self, credential: str | None, key: str) -> bool:
        """Remove one cache entry and report whether it existed."""
        self._authorize(credential, "clear_key")
        existed = self._cache.invalidate(key)
        self._logger.info("admin_cache_key_cleared", key=key, existed=existed)
        return existed
