"""Run the API server: python -m pendingmatches"""

import logging
import sys

import uvicorn

from pendingmatches.api import create_app
from pendingmatches.config import get_settings
from pendingmatches.logging_setup import setup_logging

logger = logging.getLogger("pendingmatches")


def main() -> int:
    settings = get_settings()
    setup_logging(settings)

    if not settings.api_key and not settings.organizer_api_keys:
        logger.error("api_key not provided in env (set CHALLONGE_API_KEY)")
        return 1
    missing = settings.missing_api_keys()
    if missing:
        logger.warning(
            "No API key for %s; requests for them will be rejected",
            ", ".join(o.value for o in missing),
        )

    app = create_app(settings)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
    return 0


if __name__ == "__main__":
    sys.exit(main())
