"""Core types and exceptions."""

from pendingmatches.core.exceptions import (
    DateIncorrectFormatError,
    DateNotProvidedError,
    PendingMatchesError,
    RequestValuesError,
    TournamentOrgNotProvidedError,
    TournamentOrgUnknownError,
    UpstreamDecodeError,
    UpstreamError,
    UpstreamStatusError,
    UpstreamTransportError,
)
from pendingmatches.core.types import (
    CacheKey,
    Match,
    Organizer,
    RequestValues,
    TournamentMatches,
    TournamentSnapshot,
)

__all__ = [
    # Types
    "CacheKey",
    "Match",
    "Organizer",
    "RequestValues",
    "TournamentMatches",
    "TournamentSnapshot",
    # Exceptions
    "DateIncorrectFormatError",
    "DateNotProvidedError",
    "PendingMatchesError",
    "RequestValuesError",
    "TournamentOrgNotProvidedError",
    "TournamentOrgUnknownError",
    "UpstreamDecodeError",
    "UpstreamError",
    "UpstreamStatusError",
    "UpstreamTransportError",
]
