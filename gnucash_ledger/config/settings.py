"""
Configuration Management for GnuCash Ledger

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The read model itself has almost nothing to configure; what remains is
diagnostics output and the default rendering of amounts and dates.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="GNUCASH_LEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Diagnostics
    debug_mode: bool = Field(
        default=False,
        description="Log at DEBUG regardless of log_level"
    )
    log_level: str = Field(
        default="INFO",
        description="Minimum level for diagnostic output"
    )
    log_json: bool = Field(
        default=True,
        description="Render diagnostics as JSON lines instead of console text"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Only accept standard logging level names."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"Unsupported log level: {v}. Allowed: {allowed}")
        return v.upper()


class FormattingSettings(BaseSettings):
    """Default rendering of amounts and dates."""

    model_config = SettingsConfigDict(
        env_prefix="GNUCASH_LEDGER_FORMAT_",
        extra="ignore"
    )

    decimal_places: int = Field(
        default=2,
        ge=0,
        le=10,
        description="Digits after the decimal point for currency amounts"
    )
    thousands_separator: str = Field(
        default=",",
        max_length=1,
        description="Grouping character for the integer part (empty to disable)"
    )
    date_format: str = Field(
        default="%Y-%m-%d",
        description="strftime pattern for formatted dates"
    )


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def app(self) -> AppSettings:
        return AppSettings()

    @property
    def formatting(self) -> FormattingSettings:
        return FormattingSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}.
    Useful for startup checks.
    """
    results = {}

    settings = get_settings()

    try:
        _ = settings.app
        results["app"] = True
    except Exception as e:
        results["app"] = False
        results["app_error"] = str(e)

    try:
        _ = settings.formatting
        results["formatting"] = True
    except Exception as e:
        results["formatting"] = False
        results["formatting_error"] = str(e)

    return results
