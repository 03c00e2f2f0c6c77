"""Challonge API constants."""

CHALLONGE_BASE_URL = "https://api.challonge.com/v2.1"

# Per-call timeout in seconds
DEFAULT_TIMEOUT = 20.0

# Connection pool; fan-outs share one client per API key
MAX_CONNECTIONS = 100

# Collection page sizes
PAGE_SIZE = 25
MATCH_PAGE_SIZE = 50

TOURNAMENT_STATE_IN_PROGRESS = "in_progress"
MATCH_STATE_OPEN = "open"

# JSON:API type of the included station records on the matches endpoint
STATION_TYPE = "station"
