"""Tests for settings and logging configuration."""

from __future__ import annotations

import logging

from practice_engine.core.config import Settings
from practice_engine.core.logging import configure_logging


class TestSettings:
    def test_defaults(self, monkeypatch) -> None:
        monkeypatch.delenv("PRACTICE_WEAKEST_TOPICS_LIMIT", raising=False)
        settings = Settings(_env_file=None)
        assert settings.weakest_topics_limit == 3
        assert settings.topics_cache_enabled is True
        assert settings.log_level == "INFO"

    def test_reads_prefixed_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("PRACTICE_WEAKEST_TOPICS_LIMIT", "5")
        monkeypatch.setenv("practice_topics_cache_enabled", "false")
        settings = Settings(_env_file=None)
        assert settings.weakest_topics_limit == 5
        assert settings.topics_cache_enabled is False


class TestConfigureLogging:
    def test_applies_level(self, monkeypatch) -> None:
        calls = {}
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))

        configure_logging(Settings(_env_file=None, log_level="debug"))
        assert calls["level"] == logging.DEBUG
        assert "%(levelname)s" in calls["format"]

    def test_unknown_level_falls_back_to_info(self, monkeypatch) -> None:
        calls = {}
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))

        configure_logging(Settings(_env_file=None, log_level="chatty"))
        assert calls["level"] == logging.INFO
