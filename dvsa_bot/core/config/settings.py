"""Application settings with Pydantic validation."""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ...constants import Delays, Timeouts


class DVSASettings(BaseSettings):
    """Runtime settings, read from DVSA_* environment variables or `.env`."""

    # Browser
    headless: bool = Field(default=False, description="Run the browser without a window")
    browser: str = Field(
        default="firefox", description="Playwright browser engine (firefox, chromium, webkit)"
    )
    navigation_timeout_ms: int = Field(
        default=Timeouts.NAVIGATION, ge=0, description="Default Playwright navigation timeout"
    )

    # Page flow
    verification: str = Field(
        default="strict",
        description="Page heading verification policy (strict raises, lenient logs)",
    )
    queue_timeout: Optional[float] = Field(
        default=None,
        gt=0,
        description="Seconds to wait in the queue interstitial (unset waits forever)",
    )

    # Pacing
    pacing_min_delay: float = Field(
        default=Delays.PACING_MIN, ge=0, description="Minimum pause between actions (seconds)"
    )
    pacing_jitter: float = Field(
        default=Delays.PACING_JITTER, ge=0, description="Random extra pause range (seconds)"
    )
    typing_delay_ms: int = Field(
        default=Delays.TYPING_PER_CHAR_MS, ge=0, description="Delay between typed characters"
    )

    # Logging
    log_level: str = Field(
        default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    log_json: bool = Field(default=False, description="Serialize file logs as JSON lines")
    log_dir: Optional[str] = Field(
        default=None, description="Directory for rotating log files (unset disables file logs)"
    )

    model_config = SettingsConfigDict(
        env_prefix="DVSA_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("browser")
    @classmethod
    def validate_browser(cls, v: str) -> str:
        """Validate browser engine name."""
        allowed = ["firefox", "chromium", "webkit"]
        if v.lower() not in allowed:
            raise ValueError(f'BROWSER must be one of: {", ".join(allowed)}')
        return v.lower()

    @field_validator("verification")
    @classmethod
    def validate_verification(cls, v: str) -> str:
        """Validate page verification policy."""
        allowed = ["strict", "lenient"]
        if v.lower() not in allowed:
            raise ValueError(f'VERIFICATION must be one of: {", ".join(allowed)}')
        return v.lower()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f'LOG_LEVEL must be one of: {", ".join(allowed)}')
        return v_upper

    @property
    def queue_timeout_ms(self) -> int:
        """Queue wait in Playwright milliseconds (0 means no timeout)."""
        if self.queue_timeout is None:
            return Timeouts.QUEUE_UNBOUNDED
        return int(self.queue_timeout * 1000)


_settings: Optional[DVSASettings] = None


def get_settings() -> DVSASettings:
    """
    Get application settings singleton.

    Returns:
        DVSASettings instance

    Raises:
        ValidationError: If settings are invalid
    """
    global _settings
    if _settings is None:
        _settings = DVSASettings()
    return _settings


def reset_settings() -> None:
    """Reset settings singleton (useful for testing)."""
    global _settings
    _settings = None
