"""Upstream Tarkov data providers.

TarkovGraphQLProvider serves player and item lookups (hard path);
BanCheckProvider and PriceHistoryProvider serve auxiliary data that the
service layer degrades on failure (soft path).
"""

from src.providers.tarkov.ban_check_provider import BanCheckProvider
from src.providers.tarkov.graphql_provider import TarkovGraphQLProvider
from src.providers.tarkov.price_history_provider import PriceHistoryProvider

__all__ = ["BanCheckProvider", "PriceHistoryProvider", "TarkovGraphQLProvider"]
