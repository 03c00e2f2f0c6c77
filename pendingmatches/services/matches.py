"""Match lookup service.

Stitches the roster cache, its refresher and the match aggregator into the
operation the HTTP layer exposes.
"""

import logging
from collections.abc import Mapping

from pendingmatches.consumers.cache import CacheRefresher, CacheStats, RefreshCache
from pendingmatches.consumers.fanout import MAX_WORKERS
from pendingmatches.consumers.matches import MatchAggregator
from pendingmatches.core import (
    Organizer,
    RequestValues,
    TournamentMatches,
    TournamentOrgUnknownError,
    TournamentSnapshot,
)
from pendingmatches.providers.challonge import ChallongeClient

logger = logging.getLogger(__name__)


class MatchService:
    """Pending-match lookups for every organizer.

    Each organizer has its own API client; all of them share one cache,
    partitioned by organizer.
    """

    def __init__(
        self,
        cache: RefreshCache,
        clients: Mapping[Organizer, ChallongeClient],
        max_workers: int = MAX_WORKERS,
    ) -> None:
        self._cache = cache
        self._clients = dict(clients)
        self._refreshers = {
            organizer: CacheRefresher(cache, client, max_workers=max_workers)
            for organizer, client in self._clients.items()
        }
        self._aggregators = {
            organizer: MatchAggregator(client, max_workers=max_workers)
            for organizer, client in self._clients.items()
        }

    @property
    def cache(self) -> RefreshCache:
        return self._cache

    def get_tournaments(self, values: RequestValues) -> list[TournamentSnapshot]:
        """Get cached rosters for a request, refreshing them when stale.

        Clears the whole cache first when the clear interval elapsed.

        Raises:
            TournamentOrgUnknownError: No client configured for the organizer
            UpstreamError: Refresh failed; cached data is left as it was
        """
        refresher = self._refreshers.get(values.organizer)
        if refresher is None:
            raise TournamentOrgUnknownError(values.organizer.value)

        if self._cache.should_clear_all():
            self._cache.clear_all()

        key = values.cache_key
        refresher.refresh_if_needed(key)
        return self._cache.read(key, values.game_list)

    def fetch_matches(
        self,
        organizer: Organizer,
        snapshots: list[TournamentSnapshot],
    ) -> list[TournamentMatches]:
        """Fetch open matches for rosters returned by get_tournaments().

        Raises:
            UpstreamError: The first match fetch that failed
        """
        aggregator = self._aggregators.get(organizer)
        if aggregator is None:
            raise TournamentOrgUnknownError(organizer.value)
        return aggregator.aggregate(snapshots)

    def get_matches(self, values: RequestValues) -> list[TournamentMatches]:
        """Get pending matches for tournaments created after a date."""
        snapshots = self.get_tournaments(values)
        return self.fetch_matches(values.organizer, snapshots)

    def get_stats(self) -> CacheStats:
        return self._cache.get_stats()

    def close(self) -> None:
        for client in self._clients.values():
            client.close()


def create_match_service(
    clients: Mapping[Organizer, ChallongeClient],
    update_ttl: float,
    clear_ttl: float,
    max_workers: int = MAX_WORKERS,
) -> MatchService:
    """Create a MatchService with a fresh, empty cache."""
    cache = RefreshCache(update_ttl=update_ttl, clear_ttl=clear_ttl)
    return MatchService(cache, clients, max_workers=max_workers)
