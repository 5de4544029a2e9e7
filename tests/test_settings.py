"""Tests for configuration."""

import pytest
from pydantic import ValidationError

from spend_tracker.config import (
    AppSettings,
    AuthSettings,
    ScanSettings,
    StorageSettings,
    get_settings,
    validate_all_settings,
)


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestSettings:
    """Tests for the settings classes."""

    def test_defaults(self, monkeypatch):
        for name in (
            "SPEND_TRACKER_STORAGE_EXPENSES_KEY",
            "SPEND_TRACKER_STORAGE_AUTH_KEY",
            "SPEND_TRACKER_SCAN_DELAY_SECONDS",
            "SPEND_TRACKER_AUTH_MIN_PASSWORD_LENGTH",
        ):
            monkeypatch.delenv(name, raising=False)

        assert StorageSettings().expenses_key == "monthly_expenses"
        assert StorageSettings().auth_key == "auth_user"
        assert ScanSettings().delay_seconds == 2.0
        assert AuthSettings().min_password_length == 6

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("SPEND_TRACKER_SCAN_DELAY_SECONDS", "0")
        assert get_settings().scan.delay_seconds == 0.0

    def test_key_rejects_path_separator(self):
        with pytest.raises(ValidationError):
            StorageSettings(expenses_key="../expenses")

    def test_supported_formats_list(self):
        settings = AppSettings(supported_image_formats="JPG, png")
        assert settings.supported_formats_list == ["jpg", "png"]

    def test_validate_all_settings(self, monkeypatch):
        monkeypatch.setenv("SPEND_TRACKER_AUTH_MIN_PASSWORD_LENGTH", "0")

        results = validate_all_settings()

        assert results["storage"] is True
        assert results["auth"] is False
        assert isinstance(results["auth_error"], str)
