"""Health and cache status endpoints.

- GET /health - Liveness
- GET /cache/status - Cache statistics
"""

from fastapi import APIRouter, Depends

from pendingmatches.api.dependencies import get_match_service
from pendingmatches.api.models import CacheStatusResponse, HealthResponse
from pendingmatches.services import MatchService

router = APIRouter()


@router.get("/health")
def health() -> HealthResponse:
    return HealthResponse()


@router.get("/cache/status")
def get_cache_status(service: MatchService = Depends(get_match_service)) -> CacheStatusResponse:
    """Get cache statistics.

    Returns:
        Entries with their age and staleness, plus the clear clock
    """
    return CacheStatusResponse.from_stats(service.get_stats())
