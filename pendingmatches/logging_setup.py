"""Process-wide logging for the server entry point."""

import logging

from pendingmatches.config import Settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# Loggers that keep their own level unless set here
SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def setup_logging(settings: Settings) -> None:
    """Install the root handler at LOG_LEVEL (unknown names fall back to INFO)."""
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(level=level, format=LOG_FORMAT)

    for name in SERVER_LOGGERS:
        logging.getLogger(name).setLevel(level)

    # One INFO line per upstream page otherwise
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))
