"""Configuration package."""

from gnucash_ledger.config.settings import (
    AppSettings,
    FormattingSettings,
    Settings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "FormattingSettings",
    "Settings",
    "get_settings",
    "validate_all_settings",
]
