"""Per-client request rate limiting over a fixed time window.

Each client identity (the remote IP by default) owns a :class:`RateWindow`.
A window starts at the client's first request and admits ``limit`` requests;
once more than ``window_seconds`` have elapsed since its start the count
resets.

Windows are kept in a ``cachetools.TTLCache`` whose TTL is twice the window
length, so an idle client's window is released once it could no longer
reject anything.  State is process-local: a horizontally scaled deployment
needs a shared counter instead.
"""

from __future__ import annotations

import math
import time
from dataclasses import dataclass
from typing import Callable

import structlog
from cachetools import TTLCache

from src.utils.logging import get_logger


@dataclass
class RateWindow:
    """Request count for one client since ``window_start``."""

    count: int
    window_start: float


@dataclass(frozen=True)
class RateDecision:
    """Result of one admission check, used for rate-limit response headers."""

    allowed: bool
    limit: int
    remaining: int
    reset_in: float

    @property
    def reset_in_seconds(self) -> int:
        return max(0, math.ceil(self.reset_in))


class SlidingWindowRateLimiter:
    """Admits at most ``limit`` requests per client per window.

    Parameters
    ----------
    limit:
        Maximum admitted requests per window.
    window_seconds:
        Window length in seconds.
    max_clients:
        Upper bound on tracked client windows.
    clock:
        Zero-argument callable returning seconds (``time.monotonic``).
    """

    def __init__(
        self,
        limit: int = 100,
        window_seconds: float = 900,
        max_clients: int = 100_000,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if limit < 1:
            raise ValueError("limit must be at least 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        self._limit = limit
        self._window = window_seconds
        self._clock = clock
        self._windows: TTLCache[str, RateWindow] = TTLCache(
            maxsize=max_clients, ttl=2 * window_seconds, timer=clock
        )
        self._logger: structlog.BoundLogger = get_logger(__name__)

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def window_seconds(self) -> float:
        return self._window

    def check(self, client_id: str) -> RateDecision:
        """Count one request for *client_id* and decide whether to admit it."""
        now = self._clock()
        window = self._windows.get(client_id)
        if window is None or now - window.window_start > self._window:
            window = RateWindow(count=0, window_start=now)
            self._windows[client_id] = window

        window.count += 1
        allowed = window.count <= self._limit
        decision = RateDecision(
            allowed=allowed,
            limit=self._limit,
            remaining=max(0, self._limit - window.count),
            reset_in=window.window_start + self._window - now,
        )
        if not allowed:
            self._logger.warning(
                "rate_limited",
                client_id=client_id,
                count=window.count,
                limit=self._limit,
                reset_in=decision.reset_in_seconds,
            )
        return decision

    def admit(self, client_id: str) -> bool:
        return self.check(client_id).allowed

    def reset(self) -> None:
        """Forget every client window."""
        self._windows.clear()
