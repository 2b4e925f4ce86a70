"""Tests for Pydantic Settings configuration."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from resultkit.config import LoggingSettings, RetrySettings, Settings, get_settings


class TestRetrySettings:
    """Tests for RetrySettings."""

    def test_default_values(self) -> None:
        """RetrySettings should default to no delay and constant backoff."""
        settings = RetrySettings()

        assert settings.delay_ms == 0
        assert settings.backoff == "constant"

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """RESULTKIT_RETRY_* variables should be picked up."""
        monkeypatch.setenv("RESULTKIT_RETRY_DELAY_MS", "25")
        monkeypatch.setenv("RESULTKIT_RETRY_BACKOFF", "exponential")

        settings = RetrySettings()

        assert settings.delay_ms == 25
        assert settings.backoff == "exponential"

    def test_rejects_unknown_backoff(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Only constant and exponential backoff are valid."""
        monkeypatch.setenv("RESULTKIT_RETRY_BACKOFF", "linear")

        with pytest.raises(ValidationError):
            RetrySettings()

    def test_rejects_negative_delay(self) -> None:
        """Delays cannot be negative."""
        with pytest.raises(ValidationError):
            RetrySettings(delay_ms=-1)


class TestLoggingSettings:
    """Tests for LoggingSettings."""

    def test_default_values(self) -> None:
        """LoggingSettings should default to INFO console output."""
        settings = LoggingSettings()

        assert settings.level == "INFO"
        assert settings.json_format is False

    def test_level_is_normalized(self) -> None:
        """Level names are upper-cased."""
        assert LoggingSettings(level=" debug ").level == "DEBUG"

    def test_rejects_unknown_level(self) -> None:
        """Unknown level names are rejected."""
        with pytest.raises(ValidationError):
            LoggingSettings(level="chatty")


class TestSettings:
    """Tests for the aggregated Settings."""

    def test_aggregates_sections(self) -> None:
        """Settings should expose each section."""
        settings = Settings()

        assert isinstance(settings.retry, RetrySettings)
        assert isinstance(settings.logging, LoggingSettings)


class TestGetSettings:
    """Tests for get_settings."""

    def test_returns_settings(self) -> None:
        """get_settings should return a Settings instance."""
        assert isinstance(get_settings(), Settings)

    def test_is_cached(self) -> None:
        """get_settings should return the same instance on repeated calls."""
        assert get_settings() is get_settings()

    def test_cache_clear_reloads(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Clearing the cache picks up new environment values."""
        before = get_settings()
        monkeypatch.setenv("RESULTKIT_RETRY_DELAY_MS", "7")
        get_settings.cache_clear()

        after = get_settings()

        assert after is not before
        assert after.retry.delay_ms == 7
