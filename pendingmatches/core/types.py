"""Core data types.

Dataclasses shared by the upstream client, the refresh cache and the API.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType


class Organizer(str, Enum):
    """Tournament organizing body.

    Partitions the cache so the same date never mixes brackets run by
    different organizers.
    """

    TRAVELING_CONTROLLER = "traveling_controller"
    SNS = "sns"

    @classmethod
    def parse(cls, value: str) -> "Organizer":
        """Parse an organizer name (case-insensitive).

        Raises:
            ValueError: If the name is not a known organizer
        """
        return cls(value.strip().lower())


@dataclass(frozen=True)
class TournamentSnapshot:
    """Participant roster for one tournament at one refresh."""

    game_name: str
    tournament_id: str
    participants: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Copy into a read-only view so a published snapshot can't be mutated
        object.__setattr__(self, "participants", MappingProxyType(dict(self.participants)))

    def participant_name(self, participant_id: str) -> str:
        return self.participants.get(participant_id, "")


@dataclass(frozen=True)
class CacheKey:
    """Cache partition key.

    date is an ISO YYYY-MM-DD string used as the upstream "created after"
    lower bound.
    """

    organizer: Organizer
    date: str

    def __str__(self) -> str:
        return f"{self.organizer.value}/{self.date}"


@dataclass(frozen=True)
class Match:
    """A pending match with player and station names resolved."""

    id: str
    player1_name: str
    player2_name: str
    round: int
    suggested_play_order: int
    underway: bool
    station: str = ""


@dataclass(frozen=True)
class TournamentMatches:
    """Open matches for one tournament, ordered by suggested play order."""

    game_name: str
    tournament_id: str
    match_list: list[Match] = field(default_factory=list)


@dataclass(frozen=True)
class RequestValues:
    """Validated query values for a matches lookup."""

    date: str
    organizer: Organizer
    game_list: list[str] = field(default_factory=list)

    @property
    def cache_key(self) -> CacheKey:
        return CacheKey(organizer=self.organizer, date=self.date)
