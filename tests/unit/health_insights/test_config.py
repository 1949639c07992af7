"""
Tests for configuration management in `health_insights/config.py`.

Covers:
- Environment parsing and debug defaults
- Logging level coercion to the expected Literal
- Insight threshold overrides from the environment
- Trend timezone and sample data settings
- get_config cache behavior
- AppConfig validation (debug only allowed in development)
"""

from __future__ import annotations

import pytest

from health_insights.config import (
    AppConfig,
    InsightThresholds,
    config_summary,
    get_config,
    load_config_from_env,
)

pytestmark = pytest.mark.usefixtures("clear_config_cache")


def test_load_config_dev_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "development")
    monkeypatch.delenv("LOG_LEVEL", raising=False)

    config = load_config_from_env()

    assert config.environment == "development"
    assert config.debug is True
    assert config.logging.format == "console"
    assert config.insights == InsightThresholds()
    assert config.trends.day_boundary_timezone == "UTC"


def test_production_uses_json_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "prod")

    config = load_config_from_env()

    assert config.environment == "production"
    assert config.debug is False
    assert config.logging.format == "json"


def test_logging_level_literal_coercion(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "staging")

    # Unknown level should coerce to INFO
    monkeypatch.setenv("LOG_LEVEL", "unknown")
    config = load_config_from_env()
    assert config.logging.level == "INFO"

    # Known level should pass through
    monkeypatch.setenv("LOG_LEVEL", "error")
    config = load_config_from_env()
    assert config.logging.level == "ERROR"


def test_insight_threshold_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("INSIGHT_ACTIVE_STEP_THRESHOLD", "10000")
    monkeypatch.setenv("INSIGHT_ELEVATED_GLUCOSE_THRESHOLD", "126")
    monkeypatch.setenv("INSIGHT_HEART_RATE_VARIABILITY_LIMIT", "12.5")

    thresholds = load_config_from_env().insights

    assert thresholds.active_step_threshold == 10000
    assert thresholds.elevated_glucose_threshold == 126
    assert thresholds.heart_rate_variability_limit == 12.5
    # Untouched thresholds keep their defaults
    assert thresholds.young_age_limit == 40
    assert thresholds.recent_window_days == 7


def test_invalid_threshold_fails_fast(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("INSIGHT_RECENT_WINDOW_DAYS", "0")

    with pytest.raises(ValueError):
        load_config_from_env()


def test_trend_and_sample_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DAY_BOUNDARY_TIMEZONE", "Europe/Berlin")
    monkeypatch.setenv("SAMPLE_RECORD_COUNT", "120")
    monkeypatch.setenv("SAMPLE_SEED", "42")
    monkeypatch.setenv("SAMPLE_HISTORY_DAYS", "14")

    config = load_config_from_env()

    assert config.trends.day_boundary_timezone == "Europe/Berlin"
    assert config.sample_data.record_count == 120
    assert config.sample_data.seed == 42
    assert config.sample_data.history_days == 14


def test_blank_seed_means_unseeded(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SAMPLE_SEED", " ")

    assert load_config_from_env().sample_data.seed is None


def test_invalid_timezone_fails_fast(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DAY_BOUNDARY_TIMEZONE", "Not/AZone")

    with pytest.raises(ValueError, match="Invalid timezone"):
        load_config_from_env()


def test_get_config_cache(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "development")

    # First call populates cache
    c1 = get_config()
    c2 = get_config()
    assert c1 is c2  # same object due to lru_cache


def test_app_config_debug_only_in_dev_validation() -> None:
    with pytest.raises(ValueError, match="debug mode is only allowed"):
        AppConfig(environment="production", debug=True)


def test_config_summary_sections() -> None:
    summary = config_summary(AppConfig())

    assert list(summary) == ["Environment", "Insight thresholds", "Trends", "Sample data"]
    assert summary["Insight thresholds"]["active_step_threshold"] == 8000
