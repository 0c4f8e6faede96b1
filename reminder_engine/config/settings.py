"""
Configuration Management for the Reminder Engine

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All tunable thresholds live here.
The engine functions take explicit arguments; when a caller omits one,
the value comes from these settings rather than a constant buried in code.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineSettings(BaseSettings):
    """Recurrence, calendar and classification tuning."""

    model_config = SettingsConfigDict(
        env_prefix="REMINDER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Calendar grid
    week_starts_on: str = Field(
        default="sunday",
        description="First column of the month grid (sunday or monday)"
    )

    # Status bands
    due_soon_days: int = Field(
        default=3,
        ge=1,
        description="Upper bound (days) of the due-soon band"
    )
    upcoming_days: int = Field(
        default=7,
        ge=1,
        description="Upper bound (days) of the upcoming band"
    )

    # Dashboard feed
    default_horizon_days: int = Field(
        default=7,
        ge=0,
        le=3660,
        description="Days ahead of today covered by the schedule feed"
    )
    upcoming_occurrence_limit: int = Field(
        default=10,
        ge=1,
        le=500,
        description="How many future occurrences to list per reminder"
    )

    # Monthly expansion bounds
    monthly_iteration_padding: int = Field(
        default=2,
        ge=1,
        description="Extra iterations allowed beyond the months spanned by a window"
    )
    max_monthly_iterations: Optional[int] = Field(
        default=None,
        ge=1,
        description="Optional hard cap on monthly iterations per expansion"
    )

    @field_validator('week_starts_on')
    @classmethod
    def validate_week_start(cls, v: str) -> str:
        """Only Sunday- and Monday-first grids are supported."""
        v = v.strip().lower()
        if v not in {"sunday", "monday"}:
            raise ValueError(f"Unsupported week start: {v}. Allowed: sunday, monday")
        return v

    @field_validator('upcoming_days')
    @classmethod
    def validate_upcoming_after_due_soon(cls, v: int, info: ValidationInfo) -> int:
        due_soon = info.data.get("due_soon_days")
        if due_soon is not None and v < due_soon:
            raise ValueError("upcoming_days cannot be smaller than due_soon_days")
        return v

    @property
    def first_weekday(self) -> int:
        """Weekday number (Monday=0) the grid starts on."""
        return 6 if self.week_starts_on == "sunday" else 0


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
        description="Minimum level for engine logs"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.strip().upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return v


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
    def engine(self) -> EngineSettings:
        return EngineSettings()

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

    Returns a dict of {setting_name: is_valid}.
    Useful for startup checks.
    """
    results = {}

    settings = get_settings()

    try:
        _ = settings.engine
        results["engine"] = True
    except Exception as e:
        results["engine"] = False
        results["engine_error"] = str(e)

    try:
        _ = settings.app
        results["app"] = True
    except Exception as e:
        results["app"] = False
        results["app_error"] = str(e)

    return results
