"""Public interface definitions for the cache and the upstream providers.

Business logic depends only on these abstract base classes; concrete
adapters live in ``src/providers/`` and are wired in ``src/main.py``.
Unit tests inject fakes or mocks through the same contracts.

    Interface               →  Concrete implementation (in src/providers/)
    ─────────────────────────────────────────────────────────────────────
    ICacheProvider          →  MemoryCacheProvider
    IGameDataProvider       →  TarkovGraphQLProvider
    IBanProvider            →  BanCheckProvider
    IPriceHistoryProvider   →  PriceHistoryProvider
"""

from src.interfaces.ban_provider import IBanProvider, IPriceHistoryProvider
from src.interfaces.cache_provider import ICacheProvider
from src.interfaces.game_data_provider import IGameDataProvider

__all__ = [
    "IBanProvider",
    "ICacheProvider",
    "IGameDataProvider",
    "IPriceHistoryProvider",
]
