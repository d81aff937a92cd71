"""Input validation for request identities.

Validation runs before any cache or upstream interaction; failures raise
:class:`~src.utils.errors.InputValidationError` and nothing is mutated.
"""

from __future__ import annotations

import re

from src.utils.errors import InputValidationError

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 20
QUERY_MIN_LENGTH = 2
TRENDING_DEFAULT_LIMIT = 20
TRENDING_MAX_LIMIT = 100

_USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_-]+$")
_LEADING_INT_PATTERN = re.compile(r"\s*([+-]?\d+)")


def is_valid_username(username: str | None) -> bool:
    """Return ``True`` for 3-20 characters of letters, digits, ``-`` and ``_``."""
    if not username or not isinstance(username, str):
        return False
    return (
        USERNAME_MIN_LENGTH <= len(username) <= USERNAME_MAX_LENGTH
        and _USERNAME_PATTERN.match(username) is not None
    )


def require_username(username: str | None, detailed: bool = True) -> str:
    """Return *username* unchanged or raise ``InputValidationError``."""
    if not username:
        raise InputValidationError("Username parameter is required")
    if not is_valid_username(username):
        if detailed:
            raise InputValidationError(
                "Invalid username format. Username must be 3-20 characters and "
                "contain only alphanumeric characters, hyphens, and underscores."
            )
        raise InputValidationError("Invalid username format")
    return username


def require_search_query(query: str | None) -> str:
    if not query:
        raise InputValidationError("Query parameter is required")
    if len(query) < QUERY_MIN_LENGTH:
        raise InputValidationError(
            f"Query must be at least {QUERY_MIN_LENGTH} characters long"
        )
    return query


def require_identifier(value: str | None, name: str) -> str:
    """Reject empty or whitespace-only path identifiers."""
    if value is None or not value.strip():
        raise InputValidationError(f"{name} is required")
    return value


def parse_trending_limit(raw: str | int | None) -> int:
    """Parse the trending ``limit`` parameter, clamped to ``1..100``.

    A string is read up to its first non-digit, so ``"5.5"`` and ``"10abc"``
    give 5 and 10.  Missing, non-numeric and zero values fall back to the
    default of 20.
    """
    if isinstance(raw, int):
        limit = raw
    else:
        match = _LEADING_INT_PATTERN.match(raw or "")
        limit = int(match.group(1)) if match else 0
    if limit == 0:
        return TRENDING_DEFAULT_LIMIT
    return max(1, min(limit, TRENDING_MAX_LIMIT))
