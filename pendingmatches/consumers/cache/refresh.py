"""Cache refresh logic.

Rebuilds one cache key from the Challonge API: tournament list first, then
every participant roster concurrently. The new entry is published only when
every roster arrived; a failed refresh leaves the previous entry in place.
"""

import logging
import threading
import time
from collections.abc import Iterator
from contextlib import contextmanager

from pendingmatches.consumers.fanout import MAX_WORKERS, fan_out
from pendingmatches.core import CacheKey, TournamentSnapshot
from pendingmatches.providers.challonge import ChallongeClient

from .store import RefreshCache

logger = logging.getLogger(__name__)


class CacheRefresher:
    """Refreshes cache entries from the Challonge API."""

    def __init__(
        self,
        cache: RefreshCache,
        client: ChallongeClient,
        max_workers: int = MAX_WORKERS,
    ) -> None:
        self._cache = cache
        self._client = client
        self._max_workers = max_workers
        # key -> (lock, number of callers holding or waiting on it)
        self._key_locks: dict[CacheKey, tuple[threading.Lock, int]] = {}
        self._key_locks_guard = threading.Lock()

    @contextmanager
    def _key_lock(self, key: CacheKey) -> Iterator[None]:
        """Hold the per-key lock; the lock is dropped once no caller needs it."""
        with self._key_locks_guard:
            lock, users = self._key_locks.get(key, (None, 0))
            if lock is None:
                lock = threading.Lock()
            self._key_locks[key] = (lock, users + 1)
        try:
            with lock:
                yield
        finally:
            with self._key_locks_guard:
                lock, users = self._key_locks[key]
                if users == 1:
                    del self._key_locks[key]
                else:
                    self._key_locks[key] = (lock, users - 1)

    def needs_refresh(self, key: CacheKey) -> bool:
        return self._cache.is_empty_at(key) or self._cache.should_update(key)

    def refresh(self, key: CacheKey) -> list[TournamentSnapshot]:
        """Rebuild the entry for a key unconditionally.

        Returns:
            The published snapshots

        Raises:
            UpstreamError: Any tournament or participant fetch failed. The
                cache is not touched.
        """
        start_time = time.time()
        logger.info("[CACHE] Refreshing %s", key)

        tournaments = self._client.fetch_tournaments(key.date)
        if not tournaments:
            # "No tournaments" is a real answer; cache it like any other
            self._cache.store(key, [])
            return []

        snapshots = fan_out(
            lambda item: self._client.fetch_participants(*item),
            tournaments.items(),
            max_workers=self._max_workers,
            label="participants",
        )

        self._cache.store(key, snapshots)
        logger.info(
            "[CACHE] Refreshed %s: %d tournament(s) in %.2fs",
            key,
            len(snapshots),
            time.time() - start_time,
        )
        return snapshots

    def refresh_if_needed(self, key: CacheKey) -> bool:
        """Refresh a key when it is absent, empty or stale.

        Concurrent callers for the same key serialize on a per-key lock; a
        caller that finds a newer entry published while it waited reuses it
        instead of walking the API again.

        Returns:
            True if this call performed a refresh
        """
        # Must be read before the staleness check
        seen = self._cache.get_entry(key)
        if not self.needs_refresh(key):
            return False

        with self._key_lock(key):
            current = self._cache.get_entry(key)
            if current is not None and current is not seen:
                logger.debug("[CACHE] %s refreshed by a concurrent caller", key)
                return False
            self.refresh(key)
            return True
