"""Pending matches API endpoint.

- GET /matches - Open matches of tournaments created after a date
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from pendingmatches.api.dependencies import get_match_service
from pendingmatches.api.models import TournamentMatchesResponse
from pendingmatches.api.request_values import parse_request_values
from pendingmatches.core import RequestValuesError, UpstreamError
from pendingmatches.services import MatchService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/matches")
def get_matches(
    date: str | None = Query(None, description="Tournaments created after (YYYY-MM-DD)"),
    tournament_org: str | None = Query(
        None, alias="tournamentOrg", description="Organizer (traveling_controller, sns)"
    ),
    games: str | None = Query(None, description="Comma-separated game names to keep"),
    service: MatchService = Depends(get_match_service),
) -> list[TournamentMatchesResponse]:
    """Get pending matches across in-progress tournaments.

    Rosters come from the cache (refreshed when stale); matches are always
    fetched live.

    Returns:
        Tournaments with their open matches, sorted by game name
    """
    try:
        values = parse_request_values(
            {"date": date or "", "tournamentOrg": tournament_org or "", "games": games or ""}
        )
    except RequestValuesError as e:
        logger.warning("[API] Bad matches request: %s", e)
        raise HTTPException(status_code=400, detail=str(e)) from e

    logger.info(
        "[API] Matches for %s after %s (games=%s)",
        values.organizer.value,
        values.date,
        values.game_list or "all",
    )

    try:
        snapshots = service.get_tournaments(values)
    except RequestValuesError as e:
        logger.warning("[API] Bad matches request: %s", e)
        raise HTTPException(status_code=400, detail=str(e)) from e
    except UpstreamError as e:
        logger.error("[API] Error in getting tournament data: %s", e)
        raise HTTPException(status_code=500, detail="Error in getting tournament data") from e

    try:
        tournaments = service.fetch_matches(values.organizer, snapshots)
    except UpstreamError as e:
        logger.error("[API] Error in getting match data: %s", e)
        raise HTTPException(status_code=500, detail="Error in getting match data") from e

    return [TournamentMatchesResponse.from_domain(t) for t in tournaments]
