"""Environment-based configuration using pydantic-settings.

Example:
    >>> from restcall.foundation.config import get_settings
    >>> settings = get_settings()
    >>> settings.defeat_caching
    True

    # Or with environment variables:
    # RESTCALL_BASE_URL=https://api.example.com
    # RESTCALL_REQUIRE_TOKEN=false
    # RESTCALL_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, PositiveFloat, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="RESTCALL_LOG_",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["json", "text"] = "text"

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


class RestCallSettings(BaseSettings):
    """Root settings for restcall.

    Example environment variables:
        RESTCALL_BASE_URL=https://graph.example.com
        RESTCALL_ACCEPT=application/json
        RESTCALL_DEFEAT_CACHING=false
        RESTCALL_TIMEOUT=10
        RESTCALL_LOG_FORMAT=json
    """

    model_config = SettingsConfigDict(
        env_prefix="RESTCALL_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    base_url: str = Field(default="", description="Scheme and host every call path is resolved against")
    content_type: str = "application/json"
    accept: str = "*/*"
    require_token: bool = True
    defeat_caching: bool = True
    timeout: PositiveFloat = Field(default=30.0, description="Transport timeout in seconds")
    verify_ssl: bool = True
    follow_redirects: bool = True

    logging: LoggingSettings = Field(default_factory=LoggingSettings)


@lru_cache(maxsize=1)
def get_settings() -> RestCallSettings:
    """Get the process-wide settings instance (cached)."""
    return RestCallSettings()


def clear_settings_cache() -> None:
    """Drop the cached settings so the next get_settings() rereads the environment."""
    get_settings.cache_clear()
