"""Deterministic cache keys for each class of upstream request.

Keys are ``:``-separated with a fixed namespace prefix per request class and
the free-form identifier as the final segment, so two distinct logical
requests can never produce the same key.  Usernames and search text are
case-insensitive upstream and are lower-cased here so equivalent requests
share an entry.
"""

from __future__ import annotations

BAN_STATS_KEY = "ban:stats:global"


def _normalize(text: str) -> str:
    return text.lower()


def player_search_key(username: str) -> str:
    return f"player:search:{_normalize(username)}"


def player_profile_key(player_id: str) -> str:
    return f"player:profile:{player_id}"


def ban_check_key(username: str) -> str:
    return f"ban:check:{_normalize(username)}"


def ban_stats_key() -> str:
    return BAN_STATS_KEY


def market_search_key(query: str) -> str:
    return f"market:search:{_normalize(query)}"


def market_item_key(item_id: str) -> str:
    return f"market:item:{item_id}"


def market_trending_key(limit: int) -> str:
    return f"market:trending:{limit}"


def market_history_key(item_id: str, days: int) -> str:
    # days precedes the id so the id stays the last segment.
    return f"market:history:{days}:{item_id}"
