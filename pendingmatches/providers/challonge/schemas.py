"""JSON:API document shapes returned by the Challonge v2.1 API.

Only the fields we read are modelled; everything else is ignored. Ids are
coerced to strings because upstream renders some of them as JSON numbers.
"""

from pydantic import BaseModel, ConfigDict


class _Resource(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)


# =============================================================================
# Tournaments
# =============================================================================


class TournamentAttributes(_Resource):
    name: str | None = None
    game_name: str = ""


class TournamentResource(_Resource):
    id: str
    type: str | None = None
    attributes: TournamentAttributes


class TournamentsDocument(_Resource):
    data: list[TournamentResource]


# =============================================================================
# Participants
# =============================================================================


class ParticipantAttributes(_Resource):
    name: str | None = None


class ParticipantResource(_Resource):
    id: str
    type: str | None = None
    attributes: ParticipantAttributes


class ParticipantsDocument(_Resource):
    data: list[ParticipantResource]


# =============================================================================
# Matches
# =============================================================================


class PointsByParticipant(_Resource):
    participant_id: str | None = None


class MatchTimestamps(_Resource):
    underway_at: str | None = None


class MatchAttributes(_Resource):
    state: str | None = None
    round: int | None = None
    suggested_play_order: int | None = None
    points_by_participant: list[PointsByParticipant] | None = None
    timestamps: MatchTimestamps | None = None


class RelationshipData(_Resource):
    id: str
    type: str | None = None


class Relationship(_Resource):
    data: RelationshipData | None = None


class MatchRelationships(_Resource):
    station: Relationship | None = None

    @property
    def station_id(self) -> str | None:
        if self.station is None or self.station.data is None:
            return None
        return self.station.data.id


class MatchResource(_Resource):
    id: str
    type: str | None = None
    attributes: MatchAttributes
    relationships: MatchRelationships | None = None


class IncludedAttributes(_Resource):
    name: str | None = None


class IncludedResource(_Resource):
    id: str
    type: str
    attributes: IncludedAttributes = IncludedAttributes()


class MatchesDocument(_Resource):
    data: list[MatchResource]
    included: list[IncludedResource] = []
