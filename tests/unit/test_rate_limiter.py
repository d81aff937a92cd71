"""Unit tests for SlidingWindowRateLimiter."""

from __future__ import annotations

import pytest

from src.services.rate_limiter import RateDecision, SlidingWindowRateLimiter
from tests.conftest import FakeClock


def _limiter(clock: FakeClock, limit: int = 3, window: float = 900) -> SlidingWindowRateLimiter:
    return SlidingWindowRateLimiter(limit=limit, window_seconds=window, clock=clock)


class TestSlidingWindowRateLimiter:
    def test_admits_up_to_limit(self, clock: FakeClock) -> None:
        limiter = _limiter(clock)
        assert [limiter.admit("1.2.3.4") for _ in range(3)] == [True, True, True]

    def test_rejects_request_over_limit(self, clock: FakeClock) -> None:
        limiter = _limiter(clock)
        for _ in range(3):
            limiter.check("1.2.3.4")

        decision = limiter.check("1.2.3.4")

        assert decision.allowed is False
        assert decision.remaining == 0

    def test_default_limit_admits_hundred_then_rejects(self, clock: FakeClock) -> None:
        limiter = SlidingWindowRateLimiter(clock=clock)
        results = [limiter.admit("client") for _ in range(101)]

        assert results[:100] == [True] * 100
        assert results[100] is False

    def test_clients_are_independent(self, clock: FakeClock) -> None:
        limiter = _limiter(clock, limit=1)
        assert limiter.admit("a") is True
        assert limiter.admit("a") is False
        assert limiter.admit("b") is True

    def test_window_resets_after_elapsed(self, clock: FakeClock) -> None:
        limiter = _limiter(clock, limit=1)
        limiter.check("a")
        assert limiter.admit("a") is False

        clock.advance(900.5)

        assert limiter.admit("a") is True

    def test_window_still_counting_at_exact_boundary(self, clock: FakeClock) -> None:
        limiter = _limiter(clock, limit=1)
        limiter.check("a")
        clock.advance(900)
        assert limiter.admit("a") is False

    def test_window_does_not_reset_early(self, clock: FakeClock) -> None:
        limiter = _limiter(clock, limit=1)
        limiter.check("a")
        clock.advance(899)
        assert limiter.admit("a") is False

    def test_decision_reports_remaining_and_reset(self, clock: FakeClock) -> None:
        limiter = _limiter(clock, limit=3, window=900)
        limiter.check("a")
        clock.advance(100.5)

        decision = limiter.check("a")

        assert decision.allowed is True
        assert decision.limit == 3
        assert decision.remaining == 1
        assert decision.reset_in_seconds == 800

    def test_reset_forgets_all_windows(self, clock: FakeClock) -> None:
        limiter = _limiter(clock, limit=1)
        limiter.check("a")
        limiter.reset()
        assert limiter.admit("a") is True

    def test_properties(self, clock: FakeClock) -> None:
        limiter = _limiter(clock, limit=5, window=60)
        assert limiter.limit == 5
        assert limiter.window_seconds == 60

    @pytest.mark.parametrize("limit,window", [(0, 900), (10, 0), (10, -1)])
    def test_invalid_configuration_rejected(self, limit: int, window: float) -> None:
        with pytest.raises(ValueError):
            SlidingWindowRateLimiter(limit=limit, window_seconds=window)


class TestRateDecision:
    def test_reset_seconds_rounds_up(self) -> None:
        decision = RateDecision(allowed=True, limit=1, remaining=0, reset_in=0.2)
        assert decision.reset_in_seconds == 1

    def test_reset_seconds_never_negative(self) -> None:
        decision = RateDecision(allowed=True, limit=1, remaining=0, reset_in=-3)
        assert decision.reset_in_seconds == 0
