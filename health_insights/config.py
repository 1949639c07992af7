"""
Configuration management with environment variable support and validation.

Design principles:
- Rule thresholds and cohort splits live here, not inline in the rules
- Validation at startup (fail fast)
- Type safety with Pydantic
- Day boundaries for trends are an explicit timezone choice
"""

import os
from functools import lru_cache
from typing import Literal, cast
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator, model_validator

# Load environment variables from .env file
load_dotenv()


class InsightThresholds(BaseModel):
    """Cohort splits and cut-offs used by the insight rules."""

    young_age_limit: int = Field(
        default=40, gt=0, description="Subjects younger than this form the young cohort"
    )
    older_age_start: int = Field(
        default=50, gt=0, description="Subjects at or above this age form the older cohort"
    )
    older_diabetes_risk_rate: float = Field(
        default=15.0, ge=0.0, le=100.0, description="Older-cohort diabetes rate flagged as risk"
    )
    active_step_threshold: int = Field(
        default=8000, gt=0, description="Daily steps counted as an active subject"
    )
    active_rate_target: float = Field(
        default=50.0, ge=0.0, le=100.0, description="Active share above which activity is good"
    )
    heart_rate_variability_limit: float = Field(
        default=15.0, gt=0.0, description="Heart rate std-dev (bpm) below which it is good"
    )
    elevated_glucose_threshold: int = Field(
        default=140, gt=0, description="Glucose (mg/dL) strictly above which is elevated"
    )
    elevated_glucose_rate_limit: float = Field(
        default=20.0, ge=0.0, le=100.0, description="Elevated-glucose share flagged as risk"
    )
    recent_window_days: int = Field(
        default=7, gt=0, description="Look-back window for recent activity"
    )

    @model_validator(mode="after")
    def cohorts_do_not_overlap(self) -> "InsightThresholds":
        if self.older_age_start < self.young_age_limit:
            raise ValueError("older_age_start must not be below young_age_limit")
        return self


class TrendConfig(BaseModel):
    """Daily trend aggregation settings."""

    day_boundary_timezone: str = Field(
        default="UTC", description="IANA timezone whose midnight splits calendar days"
    )

    @field_validator("day_boundary_timezone")
    def validate_timezone(cls, v):
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Invalid timezone '{v}'. Use IANA timezone identifiers.")
        return v


class SampleDataConfig(BaseModel):
    """Synthetic population settings."""

    record_count: int = Field(default=500, gt=0, description="Number of records to generate")
    seed: int | None = Field(default=None, description="Seed for reproducible populations")
    history_days: int = Field(
        default=30, gt=0, description="Timestamps are spread over this many past days"
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    format: Literal["json", "console"] = Field(default="json", description="Logging format")


class AppConfig(BaseModel):
    """Main application configuration combining all subsystems."""

    # Environment
    environment: Literal["development", "staging", "production"] = Field(
        default="development", description="Environment"
    )
    debug: bool = Field(default=False, description="Enable debug mode")

    # Component configs
    insights: InsightThresholds = Field(default_factory=InsightThresholds)
    trends: TrendConfig = Field(default_factory=TrendConfig)
    sample_data: SampleDataConfig = Field(default_factory=SampleDataConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @model_validator(mode="after")
    def debug_only_in_dev(self) -> "AppConfig":
        """Ensure debug mode is only allowed in development environment."""
        if self.debug and self.environment != "development":
            raise ValueError("debug mode is only allowed in development environment")
        return self


def load_config_from_env() -> AppConfig:
    """Load configuration from environment variables with validation."""

    def _env_to_literal(val: str) -> Literal["development", "staging", "production"]:
        v = val.strip().lower()
        if v in {"dev", "development"}:
            return "development"
        if v in {"stage", "staging"}:
            return "staging"
        return "production"

    def _level_to_literal(val: str) -> Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
        v = val.strip().upper()
        return cast(
            Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
            v if v in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"} else "INFO",
        )

    def _optional_int(val: str | None) -> int | None:
        if val is None or not val.strip():
            return None
        return int(val)

    # Detect environment
    environment = _env_to_literal(os.getenv("ENVIRONMENT", "development"))
    debug = environment == "development"

    # Unset thresholds fall back to the model defaults
    threshold_overrides = {
        name: os.environ[f"INSIGHT_{name.upper()}"]
        for name in InsightThresholds.model_fields
        if f"INSIGHT_{name.upper()}" in os.environ
    }
    insights_config = InsightThresholds.model_validate(threshold_overrides)

    trends_config = TrendConfig(
        day_boundary_timezone=os.getenv("DAY_BOUNDARY_TIMEZONE", "UTC"),
    )

    sample_config = SampleDataConfig(
        record_count=int(os.getenv("SAMPLE_RECORD_COUNT", "500")),
        seed=_optional_int(os.getenv("SAMPLE_SEED")),
        history_days=int(os.getenv("SAMPLE_HISTORY_DAYS", "30")),
    )

    logging_config = LoggingConfig(
        level=_level_to_literal(os.getenv("LOG_LEVEL", "INFO")),
        format="console" if debug else "json",
    )

    return AppConfig(
        environment=environment,
        debug=debug,
        insights=insights_config,
        trends=trends_config,
        sample_data=sample_config,
        logging=logging_config,
    )


@lru_cache
def get_config() -> AppConfig:
    """Get cached application configuration."""
    return load_config_from_env()


def config_summary(config: AppConfig) -> dict[str, dict[str, object]]:
    """Group the effective settings by section for display."""
    return {
        "Environment": {
            "environment": config.environment,
            "debug": config.debug,
            "log_level": config.logging.level,
        },
        "Insight thresholds": config.insights.model_dump(),
        "Trends": config.trends.model_dump(),
        "Sample data": config.sample_data.model_dump(),
    }
