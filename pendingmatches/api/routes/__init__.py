"""API route modules."""

from fastapi import APIRouter

from pendingmatches.api.routes import health, matches

api_v1_router = APIRouter(prefix="/v1")
api_v1_router.include_router(health.router)
api_v1_router.include_router(matches.router)

__all__ = ["api_v1_router"]
