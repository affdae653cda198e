"""
Configuration Management for Expense Tracker

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Storage keys, alert wording and logging level all live in one place
so the store and the UI never hardcode them.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Key-value blob store configuration."""

    model_config = SettingsConfigDict(
        env_prefix="EXPENSE_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    backend: str = Field(
        default="json",
        pattern="^(json|memory)$",
        description="Blob store backend"
    )
    data_path: str = Field(
        default="expense_tracker_data.json",
        description="Path of the JSON file used by the json backend"
    )

    # Keys within the blob store
    users_key: str = Field(
        default="users",
        min_length=1,
        description="Key holding the serialized user set"
    )
    current_user_id_key: str = Field(
        default="currentUserId",
        min_length=1,
        description="Key holding the id of the signed-in user"
    )

    write_retries: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Attempts per blob write before giving up"
    )

    @field_validator('data_path')
    @classmethod
    def validate_data_path(cls, v: str) -> str:
        """Warn if the parent folder is missing (it is created on first save)."""
        parent = Path(v).expanduser().parent
        if not parent.exists():
            import warnings
            warnings.warn(
                f"Data folder {parent} does not exist yet. "
                "It will be created on the first save."
            )
        return v


class NotificationSettings(BaseSettings):
    """Budget overage alert configuration."""

    model_config = SettingsConfigDict(
        env_prefix="EXPENSE_NOTIFY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    enabled: bool = Field(
        default=True,
        description="Raise a local alert when spending exceeds income"
    )
    budget_alert_title: str = Field(
        default="Budget Exceeded",
        min_length=1,
        description="Title of the overage alert"
    )
    budget_alert_body: str = Field(
        default="Your expenses have exceeded your monthly income.",
        min_length=1,
        description="Body of the overage alert"
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

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Root logging level"
    )

    # Display
    currency_symbol: str = Field(
        default="₹",
        max_length=5,
        description="Currency symbol shown next to amounts"
    )
    recent_expense_limit: int = Field(
        default=5,
        ge=1,
        le=100,
        description="How many expenses the home tab lists"
    )

    # Audit
    audit_history_size: int = Field(
        default=200,
        ge=0,
        le=10000,
        description="How many store events the audit logger keeps in memory"
    )

    @field_validator('log_level', mode='before')
    @classmethod
    def normalize_log_level(cls, v):
        return v.upper() if isinstance(v, str) else v


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
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def notifications(self) -> NotificationSettings:
        return NotificationSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


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

    Returns a dict of {setting_name: is_valid}, with a
    "<name>_error" entry for each section that failed.
    """
    results = {}

    settings = get_settings()

    sections = {
        "storage": lambda: settings.storage,
        "notifications": lambda: settings.notifications,
        "app": lambda: settings.app,
    }

    for name, load in sections.items():
        try:
            load()
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
