"""Configuration management for the Javardry scenario spoiler.

This module provides centralized configuration using pydantic-settings,
supporting environment variables, .env files, and runtime overrides.
Only the command-line collaborators are configurable; the decode pipeline
itself is fixed by the file format and takes no settings.

Example:
    >>> from javardry_spoiler.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.dump.format
    'text'

Environment Variables:
    JAVARDRY_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    JAVARDRY_JSON_LOGS: Emit logs as JSON lines
    JAVARDRY_LOG_FILE: Optional log file path
    JAVARDRY_DUMP_FORMAT: Default dump format ('text' or 'json')
    JAVARDRY_DUMP_JSON_INDENT: Indentation for JSON dumps
    JAVARDRY_DUMP_STRIP_MARKUP: Drop <br> tags from descriptions in text dumps
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from javardry_spoiler.core.exceptions import ConfigurationError


class DumpSettings(BaseSettings):
    """Configuration for the scenario dump utility.

    Attributes:
        format: Default output format.
        json_indent: Indentation used for JSON output.
        strip_markup: Remove ``<br>`` tags from descriptions in text output.
    """

    model_config = SettingsConfigDict(
        env_prefix="JAVARDRY_DUMP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    format: Literal["text", "json"] = Field(
        default="text",
        description="Default dump output format",
    )
    json_indent: int = Field(
        default=2,
        ge=0,
        le=8,
        description="Indentation for JSON output",
    )
    strip_markup: bool = Field(
        default=True,
        description="Remove <br> tags from descriptions in text output",
    )


class Settings(BaseSettings):
    """Main application settings.

    Attributes:
        log_level: Logging level for the command-line tools.
        json_logs: Emit logs as JSON lines instead of console output.
        log_file: Optional path of a log file.
        dump: Dump utility settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="JAVARDRY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Minimum level of events written to stderr or the log file",
    )
    json_logs: bool = Field(
        default=False,
        description="Emit logs as JSON lines",
    )
    log_file: Path | None = Field(
        default=None,
        description="Optional log file path",
    )

    dump: DumpSettings = Field(default_factory=DumpSettings)

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: object) -> object:
        """Accept log levels in any case.

        Args:
            value: Raw log level value.

        Returns:
            The upper-cased level when a string was given.
        """
        if isinstance(value, str):
            return value.upper()
        return value

    @field_validator("log_file", mode="after")
    @classmethod
    def ensure_log_directory_exists(cls, value: Path | None) -> Path | None:
        """Ensure the log file's directory exists, creating it if necessary.

        Args:
            value: The log file path, if any.

        Returns:
            The validated path.
        """
        if value is not None:
            value.parent.mkdir(parents=True, exist_ok=True)
        return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    try:
        return Settings()
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access.

    This is primarily useful for testing or when environment variables
    have changed at runtime.
    """
    get_settings.cache_clear()


__all__ = [
    "DumpSettings",
    "Settings",
    "clear_settings_cache",
    "get_settings",
]
