"""Challonge v2.1 API HTTP client.

Walks the paginated tournaments and participants collections and decodes
JSON:API documents into our dataclasses. Failures are raised, never retried:
a non-2xx status, a malformed payload or a transport error aborts the whole
walk and surfaces to the caller as an UpstreamError.
"""

import logging
import threading
from collections.abc import Iterator
from typing import TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from pendingmatches.core import (
    Match,
    TournamentMatches,
    TournamentSnapshot,
    UpstreamDecodeError,
    UpstreamStatusError,
    UpstreamTransportError,
)
from pendingmatches.providers.challonge.constants import (
    CHALLONGE_BASE_URL,
    DEFAULT_TIMEOUT,
    MATCH_PAGE_SIZE,
    MATCH_STATE_OPEN,
    MAX_CONNECTIONS,
    PAGE_SIZE,
    STATION_TYPE,
    TOURNAMENT_STATE_IN_PROGRESS,
)
from pendingmatches.providers.challonge.schemas import (
    MatchesDocument,
    MatchResource,
    ParticipantsDocument,
    TournamentsDocument,
)

logger = logging.getLogger(__name__)

DocumentT = TypeVar("DocumentT", bound=BaseModel)


def _describe_validation_error(error: ValidationError) -> str:
    """One-line summary of the first pydantic error."""
    first = error.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ())) or "document"
    return f"decode failed at {location}: {first.get('msg', 'invalid payload')}"


class ChallongeClient:
    """Low-level Challonge API client.

    One instance per API key. The underlying httpx.Client is created lazily
    and shared by every worker thread of a fan-out.

    Usage:
        with ChallongeClient(api_key="...") as client:
            tournaments = client.fetch_tournaments("2023-11-25")
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = CHALLONGE_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize Challonge client.

        Args:
            api_key: Static API key sent in the Authorization header
            base_url: API root, e.g. https://api.challonge.com/v2.1
            timeout: Per-call timeout in seconds
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.Client | None = None
        self._lock = threading.Lock()

    @property
    def base_url(self) -> str:
        return self._base_url

    def _get_client(self) -> httpx.Client:
        if self._client is None:
            with self._lock:
                # Double-check after acquiring lock
                if self._client is None:
                    self._client = httpx.Client(
                        timeout=self._timeout,
                        transport=self._transport,
                        headers={
                            "Accept": "application/json",
                            "Content-Type": "application/vnd.api+json",
                            "Authorization-Type": "v1",
                            "Authorization": self._api_key,
                        },
                        limits=httpx.Limits(
                            max_connections=MAX_CONNECTIONS,
                            max_keepalive_connections=MAX_CONNECTIONS,
                        ),
                    )
        return self._client

    def _request(self, path: str, params: dict, document: type[DocumentT]) -> DocumentT:
        """GET a collection endpoint and decode it as a JSON:API document.

        Raises:
            UpstreamStatusError: Non-2xx response
            UpstreamTransportError: Connection failure or timeout
            UpstreamDecodeError: Body is not the expected document
        """
        url = f"{self._base_url}{path}"
        try:
            response = self._get_client().get(url, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            reason = e.response.reason_phrase or httpx.codes.get_reason_phrase(status_code)
            logger.warning("[CHALLONGE] HTTP %d for %s", status_code, path)
            raise UpstreamStatusError(status_code, reason) from e
        except httpx.TimeoutException as e:
            logger.warning("[CHALLONGE] Timed out after %.1fs for %s", self._timeout, path)
            raise UpstreamTransportError(f"request to {path} timed out: {e}") from e
        except httpx.RequestError as e:
            logger.warning("[CHALLONGE] Request failed for %s: %s", path, e)
            raise UpstreamTransportError(f"request to {path} failed: {e}") from e

        try:
            return document.model_validate_json(response.content)
        except ValidationError as e:
            detail = _describe_validation_error(e)
            logger.warning("[CHALLONGE] Bad payload from %s: %s", path, detail)
            raise UpstreamDecodeError(detail) from e

    def _paginate(
        self, path: str, params: dict, document: type[DocumentT]
    ) -> Iterator[DocumentT]:
        """Yield pages 1, 2, 3, ... until one comes back with no data.

        An empty page is the only stop condition; upstream count headers are
        not trusted.
        """
        page = 1
        while True:
            result = self._request(path, {**params, "page": page, "per_page": PAGE_SIZE}, document)
            if not result.data:
                logger.debug("[CHALLONGE] %s exhausted after %d page(s)", path, page - 1)
                return
            yield result
            page += 1

    def fetch_tournaments(self, date: str) -> dict[str, str]:
        """Fetch in-progress tournaments created after a date.

        Args:
            date: ISO date (YYYY-MM-DD) used as the created_after lower bound

        Returns:
            Mapping of tournament id -> game name (empty dict when none)
        """
        tournaments: dict[str, str] = {}
        params = {"state": TOURNAMENT_STATE_IN_PROGRESS, "created_after": date}
        for page in self._paginate("/tournaments.json", params, TournamentsDocument):
            for tournament in page.data:
                tournaments[tournament.id] = tournament.attributes.game_name

        logger.info("[CHALLONGE] %d tournament(s) created after %s", len(tournaments), date)
        return tournaments

    def fetch_participants(self, tournament_id: str, game_name: str) -> TournamentSnapshot:
        """Fetch the full participant roster of a tournament.

        Args:
            tournament_id: Challonge tournament id
            game_name: Game label carried onto the snapshot

        Returns:
            TournamentSnapshot with participant id -> name
        """
        participants: dict[str, str] = {}
        path = f"/tournaments/{tournament_id}/participants.json"
        for page in self._paginate(path, {}, ParticipantsDocument):
            for participant in page.data:
                participants[participant.id] = participant.attributes.name or ""

        logger.debug(
            "[CHALLONGE] Tournament %s (%s): %d participant(s)",
            tournament_id,
            game_name,
            len(participants),
        )
        return TournamentSnapshot(
            game_name=game_name,
            tournament_id=tournament_id,
            participants=participants,
        )

    def fetch_matches(self, snapshot: TournamentSnapshot) -> list[Match]:
        """Fetch open matches for a tournament.

        Single page: upstream only returns open matches, which stay few.
        Player names come from the snapshot roster and station names from
        the document's included stations. Unknown ids resolve to "".

        Returns:
            Matches sorted by suggested play order
        """
        params = {"page": 1, "per_page": MATCH_PAGE_SIZE, "state": MATCH_STATE_OPEN}
        path = f"/tournaments/{snapshot.tournament_id}/matches.json"
        document = self._request(path, params, MatchesDocument)

        stations = {
            item.id: item.attributes.name or ""
            for item in document.included
            if item.type == STATION_TYPE
        }

        matches = [self._parse_match(item, snapshot, stations) for item in document.data]
        matches.sort(key=lambda m: m.suggested_play_order)
        return matches

    def fetch_tournament_matches(self, snapshot: TournamentSnapshot) -> TournamentMatches:
        """Fetch open matches and tag them with the snapshot's tournament."""
        return TournamentMatches(
            game_name=snapshot.game_name,
            tournament_id=snapshot.tournament_id,
            match_list=self.fetch_matches(snapshot),
        )

    def _parse_match(
        self,
        item: MatchResource,
        snapshot: TournamentSnapshot,
        stations: dict[str, str],
    ) -> Match:
        attributes = item.attributes
        players = [
            snapshot.participant_name(points.participant_id) if points.participant_id else ""
            for points in (attributes.points_by_participant or [])[:2]
        ]
        # Byes and unfilled slots leave fewer than two entries
        players += [""] * (2 - len(players))

        timestamps = attributes.timestamps
        station_id = item.relationships.station_id if item.relationships else None
        return Match(
            id=item.id,
            player1_name=players[0],
            player2_name=players[1],
            round=attributes.round or 0,
            suggested_play_order=attributes.suggested_play_order or 0,
            underway=bool(timestamps and timestamps.underway_at),
            station=stations.get(station_id, "") if station_id else "",
        )

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            self._client.close()
            self._client = None

    def __enter__(self) -> "ChallongeClient":
        return self

    def __exit__(self, *args) -> None:
        self.close()
