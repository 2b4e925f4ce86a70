"""
Library configuration using Pydantic Settings.

This module provides typed and validated settings for resultkit,
with support for environment variables and .env files.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

Backoff = Literal["constant", "exponential"]


class RetrySettings(BaseSettings):
    """Defaults applied to retry policies that omit a delay or backoff."""

    model_config = SettingsConfigDict(env_prefix="RESULTKIT_RETRY_")

    delay_ms: float = Field(
        default=0, ge=0, description="Base delay between attempts in milliseconds"
    )
    backoff: Backoff = Field(default="constant", description="Delay growth strategy")


class LoggingSettings(BaseSettings):
    """Logging output settings."""

    model_config = SettingsConfigDict(env_prefix="RESULTKIT_LOG_")

    level: str = Field(default="INFO", description="Minimum log level")
    json_format: bool = Field(default=False, description="Render logs as JSON")

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: str) -> str:
        """Upper-case the level name and reject unknown levels."""
        level = str(v).strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            msg = f"Invalid log level: {v}"
            raise ValueError(msg)
        return level


class Settings(BaseSettings):
    """
    Main library settings.

    Aggregates all configuration sections.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    retry: RetrySettings = Field(default_factory=RetrySettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get cached library settings.

    Uses LRU cache to ensure settings are only loaded once.

    Returns:
        Configured Settings instance.
    """
    return Settings()
