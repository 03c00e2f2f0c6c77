"""Tournament roster cache.

RefreshCache holds the snapshots; CacheRefresher rebuilds them from the API.
"""

from .refresh import CacheRefresher
from .store import RefreshCache
from .types import CacheEntry, CacheStats, EntryStats

__all__ = [
    "CacheEntry",
    "CacheRefresher",
    "CacheStats",
    "EntryStats",
    "RefreshCache",
]
