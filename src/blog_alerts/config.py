"""Configuration management service with Pydantic Settings.

This module provides centralized configuration for the alert filter,
loading and validating environment variables at startup.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from blog_alerts.models import HTML_TAG_NAME_PATTERN, AlertKind


class AlertSettings(BaseSettings):
    """Markup settings for rendered alerts."""

    model_config = SettingsConfigDict(
        env_prefix="ALERT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    container_tag: str = Field(
        default="div",
        alias="ALERT_CONTAINER_TAG",
        description="Element wrapping each rendered alert",
    )
    title_tag: str = Field(
        default="p",
        alias="ALERT_TITLE_TAG",
        description="Element holding the alert label",
    )
    labels: dict[str, str] = Field(
        default_factory=dict,
        alias="ALERT_LABELS",
        description="Label overrides keyed by alert tag, as a JSON object",
    )

    @field_validator("container_tag", "title_tag")
    @classmethod
    def validate_tag(cls, v: str) -> str:
        """Validate HTML element name."""
        if not HTML_TAG_NAME_PATTERN.match(v):
            raise ValueError("Alert markup tags must be lowercase HTML element names")
        return v

    @field_validator("labels")
    @classmethod
    def validate_labels(cls, v: dict[str, str]) -> dict[str, str]:
        """Validate that every override names a known alert tag."""
        unknown = sorted(set(v) - set(AlertKind.__members__))
        if unknown:
            known = ", ".join(AlertKind.__members__)
            raise ValueError(f"Unknown alert tags {unknown}; expected one of {known}")
        return v


class Settings(BaseSettings):
    """Main application settings.

    Loads configuration from environment variables with support for
    .env files via python-dotenv.

    Example:
        ```python
        from blog_alerts.config import get_settings

        settings = get_settings()
        print(settings.alerts.container_tag)
        print(settings.log_level)
        ```
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    alerts: AlertSettings = Field(default_factory=AlertSettings)

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        alias="LOG_LEVEL",
        description="Logging level",
    )

    def summary(self) -> dict[str, str]:
        """Get a printable summary of the settings."""
        labels = ", ".join(sorted(self.alerts.labels)) or "(defaults)"
        return {
            "container_tag": self.alerts.container_tag,
            "title_tag": self.alerts.title_tag,
            "label_overrides": labels,
            "log_level": self.log_level,
        }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Uses LRU cache to ensure settings are loaded only once and
    reused across the application.

    Returns:
        The Settings instance.

    Raises:
        ValidationError: If environment variables have invalid values.
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache.

    Useful for testing when you need to reload settings with
    different environment variables.
    """
    get_settings.cache_clear()
