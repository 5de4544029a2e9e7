"""
Configuration Management for Spend Tracker

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Storage keys, mock service delays and display defaults all live in one
place and are validated at startup.
"""

from functools import lru_cache
from pathlib import Path
from typing import Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Local key-value storage configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SPEND_TRACKER_STORAGE_",
        extra="ignore"
    )

    data_dir: str = Field(
        default=".spend_tracker",
        description="Directory holding one JSON document per storage key"
    )

    # Keys within the storage
    expenses_key: str = Field(
        default="monthly_expenses",
        min_length=1,
        description="Key of the persisted expense collection"
    )
    auth_key: str = Field(
        default="auth_user",
        min_length=1,
        description="Key of the signed-in user profile"
    )

    @field_validator('expenses_key', 'auth_key')
    @classmethod
    def validate_key(cls, v: str) -> str:
        """Keys become file names, so path separators are not allowed."""
        if "/" in v or "\\" in v:
            raise ValueError(f"Storage key must not contain path separators: {v}")
        return v

    @property
    def data_path(self) -> Path:
        return Path(self.data_dir)


class ScanSettings(BaseSettings):
    """Receipt scan service configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SPEND_TRACKER_SCAN_",
        extra="ignore"
    )

    delay_seconds: float = Field(
        default=2.0,
        ge=0.0,
        le=30.0,
        description="Simulated processing time of the mock scanner"
    )


class AuthSettings(BaseSettings):
    """Mock credential service configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SPEND_TRACKER_AUTH_",
        extra="ignore"
    )

    delay_seconds: float = Field(
        default=1.0,
        ge=0.0,
        le=30.0,
        description="Simulated latency of email sign-in and sign-up"
    )
    google_delay_seconds: float = Field(
        default=1.5,
        ge=0.0,
        le=30.0,
        description="Simulated latency of the Google sign-in flow"
    )
    min_password_length: int = Field(
        default=6,
        ge=1,
        description="Shortest password the mock service accepts"
    )


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Display
    recent_expenses_limit: int = Field(
        default=5,
        ge=1,
        le=50,
        description="How many expenses the home page lists"
    )
    currency_symbol: str = Field(
        default="$",
        max_length=3,
        description="Symbol prefixed to displayed amounts"
    )
    supported_image_formats: str = Field(
        default="jpg,jpeg,png,webp",
        description="Comma-separated list of receipt image formats"
    )

    @property
    def supported_formats_list(self) -> list[str]:
        """Get supported formats as a list."""
        return [fmt.strip().lower() for fmt in self.supported_image_formats.split(",")]


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

    # Sub-settings are loaded lazily to allow partial configuration

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def scan(self) -> ScanSettings:
        return ScanSettings()

    @property
    def auth(self) -> AuthSettings:
        return AuthSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, Union[bool, str]]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, plus
    {setting_name}_error entries for the sections that failed.
    """
    results = {}

    settings = get_settings()

    for name in ("storage", "scan", "auth", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
