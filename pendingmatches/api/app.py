"""FastAPI application factory."""

import logging
from collections.abc import Mapping
from contextlib import asynccontextmanager

from fastapi import FastAPI

from pendingmatches.api.routes import api_v1_router
from pendingmatches.config import Settings, get_settings
from pendingmatches.core import Organizer
from pendingmatches.providers.challonge import ChallongeClient
from pendingmatches.services import create_match_service

logger = logging.getLogger(__name__)


def build_clients(settings: Settings) -> dict[Organizer, ChallongeClient]:
    """One Challonge client per organizer that has an API key."""
    return {
        organizer: ChallongeClient(
            api_key=settings.api_key_for(organizer),
            base_url=settings.base_url,
            timeout=settings.timeout,
        )
        for organizer in Organizer
        if settings.api_key_for(organizer)
    }


def create_app(
    settings: Settings | None = None,
    clients: Mapping[Organizer, ChallongeClient] | None = None,
) -> FastAPI:
    """Create the application.

    Args:
        settings: Defaults to settings from the environment
        clients: Pre-built clients per organizer (tests inject mocked ones)
    """
    settings = settings or get_settings()
    if clients is None:
        clients = build_clients(settings)

    service = create_match_service(
        clients,
        update_ttl=settings.cache_update_ttl,
        clear_ttl=settings.cache_clear_ttl,
        max_workers=settings.max_workers,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "Application startup complete (organizers=%s, update_ttl=%.0fs, clear_ttl=%.0fs)",
            ", ".join(o.value for o in clients) or "none",
            settings.cache_update_ttl,
            settings.cache_clear_ttl,
        )
        yield
        service.close()
        logger.info("Application shutdown complete")

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.state.match_service = service
    app.include_router(api_v1_router)

    for route in api_v1_router.routes:
        logger.info("%s %s route setup", ",".join(sorted(route.methods)), route.path)

    return app
