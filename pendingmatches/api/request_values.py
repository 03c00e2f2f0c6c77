"""Query parameter parsing for match lookups."""

import re
from collections.abc import Mapping
from datetime import datetime

from pendingmatches.core import (
    DateIncorrectFormatError,
    DateNotProvidedError,
    Organizer,
    RequestValues,
    TournamentOrgNotProvidedError,
    TournamentOrgUnknownError,
)

DATE_FORMAT = "%Y-%m-%d"

# Zero-padded only; strptime alone also accepts 2023-1-5
DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def parse_game_list(games: str | None) -> list[str]:
    """Split a comma-separated games parameter, dropping blank entries."""
    if not games:
        return []
    return [game.strip() for game in games.split(",") if game.strip()]


def parse_request_values(query: Mapping[str, str]) -> RequestValues:
    """Validate query parameters for a matches lookup.

    Args:
        query: Raw query parameters (date, tournamentOrg, games)

    Returns:
        RequestValues

    Raises:
        DateNotProvidedError: date missing or blank
        DateIncorrectFormatError: date not YYYY-MM-DD
        TournamentOrgNotProvidedError: tournamentOrg missing or blank
        TournamentOrgUnknownError: tournamentOrg not a known organizer
    """
    date_str = (query.get("date") or "").strip()
    if not date_str:
        raise DateNotProvidedError()
    if not DATE_PATTERN.fullmatch(date_str):
        raise DateIncorrectFormatError()
    try:
        datetime.strptime(date_str, DATE_FORMAT)
    except ValueError as e:
        raise DateIncorrectFormatError() from e

    org_str = (query.get("tournamentOrg") or "").strip()
    if not org_str:
        raise TournamentOrgNotProvidedError()
    try:
        organizer = Organizer.parse(org_str)
    except ValueError as e:
        raise TournamentOrgUnknownError(org_str) from e

    return RequestValues(
        date=date_str,
        organizer=organizer,
        game_list=parse_game_list(query.get("games")),
    )
