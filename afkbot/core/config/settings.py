"""Application settings with Pydantic validation."""

from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ...constants import AccountsFile, BrowserHeaders, Endpoints, Intervals, Timeouts

VALID_LOG_LEVELS = frozenset({"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"})


class AfkSettings(BaseSettings):
    """Application settings with validation and environment variable support.

    Every field can be set through an ``AFK_``-prefixed environment variable
    or a ``.env`` file, e.g. ``AFK_PING_INTERVAL_MS=2000``.
    """

    # Accounts
    accounts_file: Path = Field(
        default=Path(AccountsFile.DEFAULT_PATH),
        description="Path to the email:password accounts file",
    )

    # Pinging
    ping_interval_ms: int = Field(
        default=Intervals.PING_DEFAULT_MS,
        ge=Intervals.PING_MIN_MS,
        description="Fixed-rate ping interval in milliseconds",
    )

    # HTTP
    request_timeout: float = Field(
        default=Timeouts.HTTP_REQUEST_SECONDS, gt=0, description="HTTP request timeout in seconds"
    )
    max_redirects: int = Field(
        default=5, ge=0, description="Redirects followed by the auth callback"
    )
    gateway_base: str = Field(
        default=Endpoints.GATEWAY_BASE, description="Base URL of the login gateway"
    )
    hosting_base: str = Field(
        default=Endpoints.HOSTING_BASE, description="Base URL of the hosting dashboard API"
    )
    user_agent: str = Field(default=BrowserHeaders.USER_AGENT, description="User-Agent header")

    # Logging
    log_level: str = Field(default="INFO", description="Console log level")
    log_timezone: str = Field(
        default="Asia/Manila", description="IANA timezone used for log timestamps"
    )
    log_file: Optional[Path] = Field(
        default=None, description="Optional rotating log file (disabled when empty)"
    )
    log_json: bool = Field(default=False, description="Write the log file as JSON lines")
    show_raw_responses: bool = Field(
        default=True, description="Log the raw payload of every ping response"
    )

    model_config = SettingsConfigDict(
        env_prefix="AFK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize the log level."""
        level = v.upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Invalid log level: {v}. Must be one of {', '.join(sorted(VALID_LOG_LEVELS))}"
            )
        return level

    @field_validator("log_timezone")
    @classmethod
    def validate_log_timezone(cls, v: str) -> str:
        """Ensure the timezone name is known to the tz database."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {v}") from e
        return v

    @field_validator("gateway_base", "hosting_base")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Base URLs are joined with absolute paths."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Base URL must start with http:// or https://, got {v}")
        return v.rstrip("/")


# Singleton instance
_settings: Optional[AfkSettings] = None


def get_settings() -> AfkSettings:
    """
    Get application settings singleton.

    Returns:
        AfkSettings instance

    Raises:
        ValidationError: If settings are invalid
    """
    global _settings
    if _settings is None:
        _settings = AfkSettings()
    return _settings


def reset_settings() -> None:
    """Reset settings singleton (useful for testing)."""
    global _settings
    _settings = None
