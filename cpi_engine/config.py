"""
Configuration management using pydantic-settings.
All settings loaded from environment variables (12-factor app).
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine settings loaded from environment variables (prefix ``CPI_``)."""

    model_config = SettingsConfigDict(
        env_prefix="CPI_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: str = Field(default="info", description="Log level")
    log_format: str = Field(default="console", description="Log format (json|console)")

    # Forecasting
    forecast_horizon_months: int = Field(
        default=12, ge=1, le=60, description="Months projected per forecast"
    )
    regression_window: int = Field(
        default=24, ge=2, description="Trailing points used for the OLS trend fit"
    )
    min_forecast_points: int = Field(
        default=6, ge=2, description="Minimum valid points required to forecast"
    )

    # Dataset conventions
    national_aggregate: str = Field(
        default="All India", description="Aggregate row excluded from per-state batches"
    )
    preferred_base_year: str = Field(
        default="2019", description="Base year preferred when resolving the latest period"
    )

    # Batch execution
    batch_max_workers: int = Field(
        default=1, ge=1, le=64, description="Thread pool size for per-state batches"
    )

    # Development
    dev_mode: bool = Field(default=True, description="Development mode")

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Restrict log format to the supported renderers."""
        v = v.lower()
        if v not in ("json", "console"):
            raise ValueError("log_format must be 'json' or 'console'")
        return v


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Uses lru_cache to ensure singleton behavior.
    """
    return Settings()
