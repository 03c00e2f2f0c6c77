"""FastAPI dependencies."""

from fastapi import Request

from pendingmatches.services import MatchService


def get_match_service(request: Request) -> MatchService:
    """Service built by the app factory for this process."""
    return request.app.state.match_service
