"""Cache data types.

Dataclasses for cache entries and statistics.
"""

from dataclasses import dataclass

from pendingmatches.core import CacheKey, TournamentSnapshot


@dataclass(frozen=True)
class CacheEntry:
    """Snapshots fetched for one cache key.

    Replaced wholesale on every refresh, never mutated.
    """

    snapshots: tuple[TournamentSnapshot, ...]
    fetched_at: float  # clock reading at publish time

    @property
    def is_empty(self) -> bool:
        return not self.snapshots


@dataclass
class EntryStats:
    """Age and size of one cache entry."""

    key: CacheKey
    tournaments_count: int
    age_seconds: float
    is_stale: bool


@dataclass
class CacheStats:
    """Cache statistics."""

    entries: list[EntryStats]
    update_ttl_seconds: float
    clear_ttl_seconds: float
    seconds_since_clear: float | None  # None until the first clear

    @property
    def entries_count(self) -> int:
        return len(self.entries)
