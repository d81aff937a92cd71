"""Cache providers.

MemoryCacheProvider is a process-local LRU store, fast but not shared across
processes. For multi-worker deployments, swap in a Redis adapter implementing
ICacheProvider without changing any business logic.
"""

from src.providers.cache.memory_cache import MemoryCacheProvider

__all__ = ["MemoryCacheProvider"]
