"""Pydantic models for API responses."""

from pydantic import BaseModel, ConfigDict

from pendingmatches.consumers.cache import CacheStats
from pendingmatches.core import TournamentMatches

# =============================================================================
# Matches
# =============================================================================


class MatchResponse(BaseModel):
    """A pending match."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    player1_name: str
    player2_name: str
    round: int
    suggested_play_order: int
    underway: bool
    station: str


class TournamentMatchesResponse(BaseModel):
    """Open matches of one tournament."""

    model_config = ConfigDict(from_attributes=True)

    game_name: str
    tournament_id: str
    match_list: list[MatchResponse]

    @classmethod
    def from_domain(cls, tournament: TournamentMatches) -> "TournamentMatchesResponse":
        return cls.model_validate(tournament)


# =============================================================================
# Health / cache
# =============================================================================


class HealthResponse(BaseModel):
    status: str = "UP"


class CacheEntryResponse(BaseModel):
    organizer: str
    date: str
    tournaments_count: int
    age_seconds: float
    is_stale: bool


class CacheStatusResponse(BaseModel):
    """Cache statistics."""

    entries_count: int
    entries: list[CacheEntryResponse]
    update_ttl_seconds: float
    clear_ttl_seconds: float
    seconds_since_clear: float | None

    @classmethod
    def from_stats(cls, stats: CacheStats) -> "CacheStatusResponse":
        return cls(
            entries_count=stats.entries_count,
            entries=[
                CacheEntryResponse(
                    organizer=entry.key.organizer.value,
                    date=entry.key.date,
                    tournaments_count=entry.tournaments_count,
                    age_seconds=round(entry.age_seconds, 3),
                    is_stale=entry.is_stale,
                )
                for entry in stats.entries
            ],
            update_ttl_seconds=stats.update_ttl_seconds,
            clear_ttl_seconds=stats.clear_ttl_seconds,
            seconds_since_clear=stats.seconds_since_clear,
        )
