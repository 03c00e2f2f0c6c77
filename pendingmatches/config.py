"""Application settings.

Configuration via environment variables:
    CHALLONGE_API_KEY: API key for every organizer (falls back to API_KEY)
    CHALLONGE_API_KEY_TRAVELING_CONTROLLER: Key override for that organizer
    CHALLONGE_API_KEY_SNS: Key override for that organizer
    CHALLONGE_BASE_URL: API root (default: https://api.challonge.com/v2.1)
    CHALLONGE_TIMEOUT: Per-call timeout in seconds (default: 20)
    CACHE_UPDATE_TTL: Seconds before a cached roster is stale (default: 300)
    CACHE_CLEAR_TTL: Seconds before the whole cache is wiped (default: 86400)
    FANOUT_MAX_WORKERS: Max parallel upstream calls per fan-out (default: 50)
    HOST / PORT: Listen address (default: 0.0.0.0:8080)
    LOG_LEVEL: Logging level (default: INFO)
"""

import os
from dataclasses import dataclass, field
from functools import lru_cache

from pendingmatches.consumers.fanout import MAX_WORKERS
from pendingmatches.core import Organizer
from pendingmatches.providers.challonge.constants import CHALLONGE_BASE_URL, DEFAULT_TIMEOUT


def _api_key_env(organizer: Organizer) -> str:
    return f"CHALLONGE_API_KEY_{organizer.name}"


@dataclass
class Settings:
    """Application settings loaded from environment variables with safe defaults."""

    app_name: str = "Pending Matches"
    api_key: str = ""
    organizer_api_keys: dict[Organizer, str] = field(default_factory=dict)
    base_url: str = CHALLONGE_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    cache_update_ttl: float = 5 * 60
    cache_clear_ttl: float = 24 * 60 * 60
    max_workers: int = MAX_WORKERS
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Create Settings from environment variables."""
        organizer_api_keys = {
            organizer: os.environ[_api_key_env(organizer)]
            for organizer in Organizer
            if os.environ.get(_api_key_env(organizer))
        }
        return cls(
            app_name=os.getenv("APP_NAME", cls.app_name),
            api_key=os.getenv("CHALLONGE_API_KEY") or os.getenv("API_KEY", ""),
            organizer_api_keys=organizer_api_keys,
            base_url=os.getenv("CHALLONGE_BASE_URL", cls.base_url),
            timeout=float(os.getenv("CHALLONGE_TIMEOUT", cls.timeout)),
            cache_update_ttl=float(os.getenv("CACHE_UPDATE_TTL", cls.cache_update_ttl)),
            cache_clear_ttl=float(os.getenv("CACHE_CLEAR_TTL", cls.cache_clear_ttl)),
            max_workers=int(os.getenv("FANOUT_MAX_WORKERS", cls.max_workers)),
            host=os.getenv("HOST", cls.host),
            port=int(os.getenv("PORT", cls.port)),
            log_level=os.getenv("LOG_LEVEL", cls.log_level),
        )

    def api_key_for(self, organizer: Organizer) -> str:
        """API key for an organizer, falling back to the shared key."""
        return self.organizer_api_keys.get(organizer) or self.api_key

    def missing_api_keys(self) -> list[Organizer]:
        return [organizer for organizer in Organizer if not self.api_key_for(organizer)]


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings.from_env()
