"""Tests for environment-driven settings."""

import logging

import pytest

from pendingmatches.api.app import build_clients
from pendingmatches.config import Settings
from pendingmatches.core import Organizer
from pendingmatches.logging_setup import SERVER_LOGGERS, setup_logging

ENV_VARS = (
    "API_KEY",
    "CHALLONGE_API_KEY",
    "CHALLONGE_API_KEY_TRAVELING_CONTROLLER",
    "CHALLONGE_API_KEY_SNS",
    "CHALLONGE_BASE_URL",
    "CHALLONGE_TIMEOUT",
    "CACHE_UPDATE_TTL",
    "CACHE_CLEAR_TTL",
    "FANOUT_MAX_WORKERS",
    "PORT",
)


def clear_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestSettingsFromEnv:
    def test_defaults(self, monkeypatch):
        clear_env(monkeypatch)

        settings = Settings.from_env()

        assert settings.api_key == ""
        assert settings.base_url == "https://api.challonge.com/v2.1"
        assert settings.timeout == 20.0
        assert settings.cache_update_ttl == 300
        assert settings.cache_clear_ttl == 86400
        assert settings.max_workers == 50
        assert settings.port == 8080
        assert settings.missing_api_keys() == [Organizer.TRAVELING_CONTROLLER, Organizer.SNS]

    def test_overrides(self, monkeypatch):
        clear_env(monkeypatch)
        monkeypatch.setenv("CHALLONGE_API_KEY", "shared")
        monkeypatch.setenv("CHALLONGE_TIMEOUT", "7.5")
        monkeypatch.setenv("CACHE_UPDATE_TTL", "60")
        monkeypatch.setenv("FANOUT_MAX_WORKERS", "8")
        monkeypatch.setenv("PORT", "9000")

        settings = Settings.from_env()

        assert settings.api_key == "shared"
        assert settings.timeout == 7.5
        assert settings.cache_update_ttl == 60
        assert settings.max_workers == 8
        assert settings.port == 9000

    def test_legacy_api_key_variable(self, monkeypatch):
        clear_env(monkeypatch)
        monkeypatch.setenv("API_KEY", "legacy")

        assert Settings.from_env().api_key == "legacy"

    def test_per_organizer_key(self, monkeypatch):
        clear_env(monkeypatch)
        monkeypatch.setenv("CHALLONGE_API_KEY", "shared")
        monkeypatch.setenv("CHALLONGE_API_KEY_SNS", "sns-only")

        settings = Settings.from_env()

        assert settings.api_key_for(Organizer.SNS) == "sns-only"
        assert settings.api_key_for(Organizer.TRAVELING_CONTROLLER) == "shared"
        assert settings.missing_api_keys() == []


class TestBuildClients:
    def test_only_organizers_with_keys(self):
        settings = Settings(organizer_api_keys={Organizer.SNS: "sns-only"})

        clients = build_clients(settings)

        assert list(clients) == [Organizer.SNS]
        assert clients[Organizer.SNS].base_url == settings.base_url


class TestSetupLogging:
    @pytest.fixture(autouse=True)
    def restore_levels(self):
        names = (*SERVER_LOGGERS, "httpx")
        levels = {name: logging.getLogger(name).level for name in names}
        yield
        for name, level in levels.items():
            logging.getLogger(name).setLevel(level)

    def test_server_loggers_follow_level(self):
        setup_logging(Settings(log_level="debug"))

        for name in SERVER_LOGGERS:
            assert logging.getLogger(name).level == logging.DEBUG
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self):
        setup_logging(Settings(log_level="chatty"))

        assert logging.getLogger("uvicorn").level == logging.INFO
