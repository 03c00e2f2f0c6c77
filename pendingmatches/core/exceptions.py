"""Exception hierarchy.

Upstream errors propagate unmodified from the Challonge client through the
refresh cache and match aggregator. The API layer maps them to HTTP statuses.
"""


class PendingMatchesError(Exception):
    """Base class for all application errors."""


# =============================================================================
# Upstream
# =============================================================================


class UpstreamError(PendingMatchesError):
    """A call to the bracket API failed."""


class UpstreamStatusError(UpstreamError):
    """Upstream answered with a non-2xx status (auth failures included)."""

    def __init__(self, status_code: int, reason: str):
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"response not ok. {reason}")


class UpstreamDecodeError(UpstreamError):
    """Upstream payload was not a well-formed JSON:API document."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"{detail}. Internal Server Error")


class UpstreamTransportError(UpstreamError):
    """Network failure or per-call timeout."""


# =============================================================================
# Request values
# =============================================================================


class RequestValuesError(PendingMatchesError):
    """Query parameters for a matches lookup are invalid."""


class DateNotProvidedError(RequestValuesError):
    def __init__(self):
        super().__init__("date query parameter not provided")


class DateIncorrectFormatError(RequestValuesError):
    def __init__(self):
        super().__init__("incorrect date format")


class TournamentOrgNotProvidedError(RequestValuesError):
    def __init__(self):
        super().__init__("tournamentOrg query parameter not provided")


class TournamentOrgUnknownError(RequestValuesError):
    def __init__(self, value: str):
        self.value = value
        super().__init__(f"unknown tournamentOrg: {value}")
