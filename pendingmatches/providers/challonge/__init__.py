"""Challonge bracket API provider."""

from pendingmatches.providers.challonge.client import ChallongeClient

__all__ = ["ChallongeClient"]
