"""Configuration package."""

from spend_tracker.config.settings import (
    AppSettings,
    AuthSettings,
    ScanSettings,
    Settings,
    StorageSettings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "AuthSettings",
    "ScanSettings",
    "Settings",
    "StorageSettings",
    "get_settings",
    "validate_all_settings",
]
