"""Tests for settings loading."""

import pytest
from pydantic import ValidationError

from expense_tracker.config import (
    AppSettings,
    NotificationSettings,
    StorageSettings,
    get_settings,
    validate_all_settings,
)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestStorageSettings:
    def test_defaults(self, monkeypatch):
        for name in ("BACKEND", "DATA_PATH", "USERS_KEY", "CURRENT_USER_ID_KEY"):
            monkeypatch.delenv(f"EXPENSE_STORAGE_{name}", raising=False)

        settings = StorageSettings(_env_file=None)

        assert settings.backend == "json"
        assert settings.users_key == "users"
        assert settings.current_user_id_key == "currentUserId"

    def test_env_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv("EXPENSE_STORAGE_BACKEND", "memory")
        monkeypatch.setenv("EXPENSE_STORAGE_DATA_PATH", str(tmp_path / "d.json"))

        settings = StorageSettings()

        assert settings.backend == "memory"
        assert settings.data_path == str(tmp_path / "d.json")

    def test_unknown_backend_rejected(self, monkeypatch):
        monkeypatch.setenv("EXPENSE_STORAGE_BACKEND", "sqlite")
        with pytest.raises(ValidationError):
            StorageSettings()

    def test_missing_data_folder_warns(self, tmp_path):
        with pytest.warns(UserWarning, match="does not exist yet"):
            StorageSettings(data_path=str(tmp_path / "missing" / "data.json"))


class TestNotificationSettings:
    def test_disable_from_env(self, monkeypatch):
        monkeypatch.setenv("EXPENSE_NOTIFY_ENABLED", "false")
        assert NotificationSettings().enabled is False

    def test_default_wording(self):
        settings = NotificationSettings(_env_file=None)
        assert settings.budget_alert_title == "Budget Exceeded"


class TestAppSettings:
    def test_log_level_is_normalized(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert AppSettings().log_level == "DEBUG"

    def test_bad_log_level(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "loud")
        with pytest.raises(ValidationError):
            AppSettings()


class TestSettingsContainer:
    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    def test_sections_read_env(self, monkeypatch):
        monkeypatch.setenv("EXPENSE_STORAGE_USERS_KEY", "people")
        assert get_settings().storage.users_key == "people"

    def test_validate_all_settings_ok(self, monkeypatch):
        monkeypatch.setenv("EXPENSE_STORAGE_BACKEND", "memory")
        monkeypatch.setenv("LOG_LEVEL", "INFO")
        results = validate_all_settings()
        assert results["storage"] is True
        assert results["notifications"] is True
        assert results["app"] is True

    def test_validate_all_settings_reports_errors(self, monkeypatch):
        monkeypatch.setenv("EXPENSE_STORAGE_BACKEND", "sqlite")
        results = validate_all_settings()
        assert results["storage"] is False
        assert "backend" in results["storage_error"]
