"""Match aggregation across cached tournaments.

Fetches open matches for every snapshot concurrently so a request costs the
slowest single upstream call, not the sum of them.
"""

import logging

from pendingmatches.consumers.fanout import MAX_WORKERS, fan_out
from pendingmatches.core import TournamentMatches, TournamentSnapshot
from pendingmatches.providers.challonge import ChallongeClient

logger = logging.getLogger(__name__)


class MatchAggregator:
    """Fetches and merges open matches for a set of tournaments."""

    def __init__(self, client: ChallongeClient, max_workers: int = MAX_WORKERS) -> None:
        self._client = client
        self._max_workers = max_workers

    def aggregate(self, snapshots: list[TournamentSnapshot]) -> list[TournamentMatches]:
        """Get open matches for every snapshot.

        Returns:
            One TournamentMatches per snapshot, sorted by game name so equal
            input gives equal output whatever order workers finish in

        Raises:
            UpstreamError: The first match fetch that failed
        """
        results = fan_out(
            self._client.fetch_tournament_matches,
            snapshots,
            max_workers=self._max_workers,
            label="matches",
        )
        results.sort(key=lambda t: (t.game_name, t.tournament_id))
        logger.debug(
            "[MATCHES] %d match(es) across %d tournament(s)",
            sum(len(t.match_list) for t in results),
            len(results),
        )
        return results
