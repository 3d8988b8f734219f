"""
Configuration management for the review analytics engine.

Settings are read from environment variables (prefix ``REVIEWPULSE_``)
and an optional ``.env`` file.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

TREND_PERIOD_TOKENS = ("7d", "30d", "3m", "12m")


class AnalyticsSettings(BaseSettings):
    """Analytics engine settings with environment variable support"""

    # Logging
    debug: bool = False
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Database Configuration
    database_url: str = Field(
        default="sqlite:///./reviewpulse.db",
        description="SQLAlchemy URL of the review record database",
    )

    # Trend Configuration
    default_trend_period: str = Field(
        default="30d", description="Period used when a caller omits the token"
    )
    dashboard_trend_period: str = Field(
        default="12m", description="Trend period rendered on the dashboard"
    )

    # Record Store
    store_timeout_seconds: Optional[float] = Field(
        default=30.0, description="Abandon record store calls after this long"
    )

    # Roster
    unknown_tenant_name: str = "Unknown Profile"
    roster_sort_by_name: bool = True

    class Config:
        env_prefix = "REVIEWPULSE_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"

    @field_validator("default_trend_period", "dashboard_trend_period")
    @classmethod
    def validate_period(cls, v: str) -> str:
        if v not in TREND_PERIOD_TOKENS:
            raise ValueError(
                f"Invalid period {v!r}. Must be one of: {', '.join(TREND_PERIOD_TOKENS)}"
            )
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log level: {v}")
        return level

    @field_validator("store_timeout_seconds")
    @classmethod
    def validate_store_timeout(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v <= 0:
            raise ValueError("store_timeout_seconds must be positive")
        return v


@lru_cache()
def get_settings() -> AnalyticsSettings:
    """
    Get analytics settings (cached).

    Returns:
        AnalyticsSettings instance with environment variables loaded
    """
    return AnalyticsSettings()
