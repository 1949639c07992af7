"""Shared fixtures for the health insights test suite."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest

from health_insights.config import get_config
from health_insights.domain.models import Gender, HealthRecord

FIXED_NOW = datetime(2026, 3, 15, 12, 0, tzinfo=UTC)

RecordFactory = Callable[..., HealthRecord]


@pytest.fixture
def now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def make_record() -> RecordFactory:
    """Build a HealthRecord with neutral defaults, overriding only what a test cares about."""
    counter = iter(range(1_000_000))

    def _make(**overrides: Any) -> HealthRecord:
        fields: dict[str, Any] = {
            "id": f"record-{next(counter)}",
            "age": 30,
            "heart_rate": 70,
            "step_count": 6000,
            "glucose_level": 100,
            "has_diabetes": False,
            "gender": Gender.MALE,
            "timestamp": FIXED_NOW - timedelta(days=1),
        }
        fields.update(overrides)
        return HealthRecord(**fields)

    return _make


@pytest.fixture
def three_subjects(make_record: RecordFactory) -> list[HealthRecord]:
    """Young active subject plus two older, less active, diabetic subjects."""
    return [
        make_record(
            age=25,
            heart_rate=70,
            step_count=9000,
            glucose_level=90,
            has_diabetes=False,
            gender=Gender.MALE,
            timestamp=FIXED_NOW - timedelta(days=1),
        ),
        make_record(
            age=55,
            heart_rate=80,
            step_count=3000,
            glucose_level=150,
            has_diabetes=True,
            gender=Gender.FEMALE,
            timestamp=FIXED_NOW - timedelta(days=2),
        ),
        make_record(
            age=65,
            heart_rate=85,
            step_count=2000,
            glucose_level=145,
            has_diabetes=True,
            gender=Gender.MALE,
            timestamp=FIXED_NOW - timedelta(days=10),
        ),
    ]


@pytest.fixture
def clear_config_cache() -> Iterator[None]:
    """Ensure get_config cache is cleared before and after a test."""
    get_config.cache_clear()
    yield
    get_config.cache_clear()
