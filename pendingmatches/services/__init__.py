"""Service layer."""

from pendingmatches.services.matches import MatchService, create_match_service

__all__ = ["MatchService", "create_match_service"]
