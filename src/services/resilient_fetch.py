"""Resilient fetch gateway for upstream calls.

Wraps a single call to an external data source and decides what the caller
receives when that call fails.  The gateway is policy-agnostic: each call
site declares a :class:`~src.models.fetch.FetchPolicy`.

HARD
    The failure is reported.  Application errors propagate unchanged; any
    other exception is wrapped in :class:`~src.utils.errors.UpstreamError`.
SOFT
    The failure is swallowed and a caller-supplied factory builds a
    structurally valid substitute, returned as a ``DEGRADED`` result.

Failed calls are never retried.  A timed-out or errored call fails once and
immediately falls back according to its policy.
"""

from __future__ import annotations

from typing import Awaitable, Callable, TypeVar

import structlog

from src.models.fetch import FetchPolicy, FetchResult
from src.utils.errors import TarkovSearchError, UpstreamError
from src.utils.logging import get_logger

T = TypeVar("T")

PrimaryCall = Callable[[], Awaitable[T | None]]
DegradedFactory = Callable[[], T]


class ResilientFetchGateway:
    """Runs upstream calls and converts their failures per policy.

    Parameters
    ----------
    provider_name:
        Name recorded in log events and on wrapped ``UpstreamError`` instances.
    """

    def __init__(self, provider_name: str = "upstream") -> None:
        self._provider_name = provider_name
        self._logger: structlog.BoundLogger = get_logger(__name__)

    @property
    def provider_name(self) -> str:
        return self._provider_name

    async def fetch(
        self,
        primary_call: PrimaryCall[T],
        policy: FetchPolicy,
        degraded_factory: DegradedFactory[T] | None = None,
    ) -> FetchResult[T]:
        """Await *primary_call* and tag the outcome.

        A ``None`` result is reported as ``NOT_FOUND``.  On failure the
        *policy* decides between raising and degrading; SOFT requires a
        *degraded_factory*.
        """
        if policy is FetchPolicy.SOFT and degraded_factory is None:
            raise ValueError("SOFT fetch policy requires a degraded_factory")

        try:
            value = await primary_call()
        except Exception as exc:
            if policy is FetchPolicy.HARD:
                self._logger.error(
                    "upstream_failed",
                    provider=self._provider_name,
                    error=str(exc),
                    error_type=type(exc).__name__,
                )
                if isinstance(exc, TarkovSearchError):
                    raise
                raise UpstreamError(
                    message=str(exc) or "Upstream service request failed",
                    provider_name=self._provider_name,
                ) from exc

            self._logger.warning(
                "upstream_degraded",
                provider=self._provider_name,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            return FetchResult.degraded(degraded_factory(), error=str(exc))

        if value is None:
            return FetchResult.not_found()
        return FetchResult.success(value)

    async def fetch_or_degrade(
        self,
        primary_call: PrimaryCall[T],
        degraded_factory: DegradedFactory[T],
    ) -> T | None:
        """Return the primary call's value, or the degraded substitute on failure."""
        result = await self.fetch(primary_call, FetchPolicy.SOFT, degraded_factory)
        return result.value
