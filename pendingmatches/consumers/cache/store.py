"""In-memory refresh cache.

Keyed two levels deep (organizer, then date) so brackets run by different
organizers on the same date never mix. Staleness is computed on read from
each entry's publish time; a separate clear clock wipes everything.
"""

import logging
import threading
import time
from collections.abc import Callable, Iterable

from pendingmatches.core import CacheKey, Organizer, TournamentSnapshot

from .types import CacheEntry, CacheStats, EntryStats

logger = logging.getLogger(__name__)


class RefreshCache:
    """Thread-safe organizer -> date -> CacheEntry store.

    Entries are only ever published whole (store) or dropped all at once
    (clear_all), so readers never see a half-built snapshot list.
    """

    def __init__(
        self,
        update_ttl: float,
        clear_ttl: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize cache.

        Args:
            update_ttl: Seconds after which an entry is stale
            clear_ttl: Seconds after which the whole cache is wiped
            clock: Monotonic time source (injectable for tests)
        """
        self._data: dict[Organizer, dict[str, CacheEntry]] = {}
        self._update_ttl = update_ttl
        self._clear_ttl = clear_ttl
        self._clock = clock
        self._last_cleared_at: float | None = None
        self._lock = threading.RLock()

    @property
    def update_ttl(self) -> float:
        return self._update_ttl

    @property
    def clear_ttl(self) -> float:
        return self._clear_ttl

    def _get_entry(self, key: CacheKey) -> CacheEntry | None:
        with self._lock:
            return self._data.get(key.organizer, {}).get(key.date)

    def get_entry(self, key: CacheKey) -> CacheEntry | None:
        """Get the published entry for a key, if any."""
        return self._get_entry(key)

    def should_update(self, key: CacheKey) -> bool:
        """True when the key was never fetched or its entry is stale."""
        entry = self._get_entry(key)
        if entry is None:
            return True
        return self._clock() - entry.fetched_at >= self._update_ttl

    def is_empty_at(self, key: CacheKey) -> bool:
        """True when the key was never fetched or holds no tournaments."""
        entry = self._get_entry(key)
        return entry is None or entry.is_empty

    def read(
        self,
        key: CacheKey,
        game_filter: Iterable[str] | None = None,
    ) -> list[TournamentSnapshot]:
        """Get snapshots for a key, optionally restricted to some games.

        Args:
            key: Cache key
            game_filter: Game names to keep (exact match). Empty or None
                keeps everything.

        Returns:
            Snapshots (empty list when the key is absent)
        """
        entry = self._get_entry(key)
        if entry is None:
            return []

        games = set(game_filter or ())
        if not games:
            return list(entry.snapshots)
        return [s for s in entry.snapshots if s.game_name in games]

    def store(self, key: CacheKey, snapshots: Iterable[TournamentSnapshot]) -> CacheEntry:
        """Publish a new entry for a key, replacing any previous one."""
        entry = CacheEntry(snapshots=tuple(snapshots), fetched_at=self._clock())
        with self._lock:
            self._data.setdefault(key.organizer, {})[key.date] = entry
        logger.info("[CACHE] Stored %d tournament(s) for %s", len(entry.snapshots), key)
        return entry

    def should_clear_all(self) -> bool:
        """True when the clear interval elapsed (or nothing was cleared yet)."""
        with self._lock:
            last_cleared_at = self._last_cleared_at
        if last_cleared_at is None:
            return True
        return self._clock() - last_cleared_at >= self._clear_ttl

    def clear_all(self) -> None:
        """Drop every entry and restart the clear clock.

        Unconditional; callers check should_clear_all() first.
        """
        with self._lock:
            dropped = sum(len(dates) for dates in self._data.values())
            self._data = {}
            self._last_cleared_at = self._clock()
        logger.info("[CACHE] Cleared %d entr%s", dropped, "y" if dropped == 1 else "ies")

    def keys(self) -> list[CacheKey]:
        with self._lock:
            return [
                CacheKey(organizer=organizer, date=date)
                for organizer, dates in self._data.items()
                for date in dates
            ]

    def __len__(self) -> int:
        with self._lock:
            return sum(len(dates) for dates in self._data.values())

    def get_stats(self) -> CacheStats:
        """Get per-entry ages and sizes."""
        now = self._clock()
        with self._lock:
            items = [
                (CacheKey(organizer=organizer, date=date), entry)
                for organizer, dates in self._data.items()
                for date, entry in dates.items()
            ]
            last_cleared_at = self._last_cleared_at

        entries = [
            EntryStats(
                key=key,
                tournaments_count=len(entry.snapshots),
                age_seconds=now - entry.fetched_at,
                is_stale=now - entry.fetched_at >= self._update_ttl,
            )
            for key, entry in sorted(items, key=lambda kv: (kv[0].organizer.value, kv[0].date))
        ]
        return CacheStats(
            entries=entries,
            update_ttl_seconds=self._update_ttl,
            clear_ttl_seconds=self._clear_ttl,
            seconds_since_clear=None if last_cleared_at is None else now - last_cleared_at,
        )
