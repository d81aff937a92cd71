"""Tagged result of an upstream fetch.

A :class:`FetchResult` records *how* a value was obtained so call sites can
tell an authoritative answer from a fallback without inspecting exceptions:

    SUCCESS    the upstream call returned a value
    NOT_FOUND  the upstream call succeeded and reported absence (``None``)
    DEGRADED   the upstream call failed and a substitute value was used
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class FetchOutcome(str, Enum):  # noqa: UP042 -- StrEnum requires Python 3.11+
    SUCCESS = "success"
    NOT_FOUND = "not_found"
    DEGRADED = "degraded"


class FetchPolicy(str, Enum):  # noqa: UP042
    """How a call site treats upstream failure.

    HARD lookups (player and item identity) report the failure to the caller.
    SOFT lookups (ban status, statistics, price history) substitute a
    degraded value instead.
    """

    HARD = "hard"
    SOFT = "soft"


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """Outcome of one upstream fetch plus the value the caller should use."""

    outcome: FetchOutcome
    value: T | None = None
    error: str | None = None

    @classmethod
    def success(cls, value: T) -> FetchResult[T]:
        return cls(outcome=FetchOutcome.SUCCESS, value=value)

    @classmethod
    def not_found(cls) -> FetchResult[Any]:
        return cls(outcome=FetchOutcome.NOT_FOUND)

    @classmethod
    def degraded(cls, value: T, error: str | None = None) -> FetchResult[T]:
        return cls(outcome=FetchOutcome.DEGRADED, value=value, error=error)

    @property
    def is_success(self) -> bool:
        return self.outcome is FetchOutcome.SUCCESS

    @property
    def is_not_found(self) -> bool:
        return self.outcome is FetchOutcome.NOT_FOUND

    @property
    def is_degraded(self) -> bool:
        return self.outcome is FetchOutcome.DEGRADED
