"""Configuration for the ROI dashboard engine."""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DISCLAIMER_TEXT = (
    "This dashboard is for educational purposes only and does not constitute financial advice."
)


class EngineSettings(BaseSettings):
    """Thresholds and defaults used by the metrics and validation routines."""

    model_config = SettingsConfigDict(
        env_prefix="ROI_DASHBOARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    stale_days_warning: int = Field(
        default=7,
        ge=0,
        description="Age in days after which a series is reported as stale.",
    )
    weight_tolerance: float = Field(
        default=0.005,
        ge=0.0,
        description="Absolute tolerance for allocation weights summing to 1.0.",
    )
    trailing_window_days: int = Field(default=30, ge=1)
    change_log_limit: int = Field(default=5, ge=0)
    default_disclaimer_text: str = Field(default=DEFAULT_DISCLAIMER_TEXT)
    log_level: str = Field(default="INFO")


@lru_cache(maxsize=1)
def get_settings(**overrides: Any) -> EngineSettings:
    """Return cached engine settings with optional overrides."""

    if overrides:
        return EngineSettings(**overrides)
    return EngineSettings()


__all__ = ["DEFAULT_DISCLAIMER_TEXT", "EngineSettings", "get_settings"]
