"""
Tests for domain models and numeric helpers.

Testing philosophy:
- Rounding must be half-up, never banker's rounding
- Records are immutable once built
"""

from datetime import UTC, datetime, timedelta, timezone

import pytest
from hypothesis import given
from hypothesis import strategies as st

from health_insights.domain.models import (
    AgeGroup,
    Gender,
    HealthMetrics,
    HealthRecord,
    round_half_up,
    to_utc,
)


class TestRoundHalfUp:
    @pytest.mark.parametrize(
        ("value", "digits", "expected"),
        [
            (2.5, 0, 3.0),
            (3.5, 0, 4.0),
            (0.25, 1, 0.3),
            (2.45, 1, 2.5),
            (78.33333333333333, 1, 78.3),
            (66.66666666666666, 1, 66.7),
            (4666.666666666667, 0, 4667.0),
        ],
    )
    def test_rounds_halves_up(self, value: float, digits: int, expected: float) -> None:
        assert round_half_up(value, digits) == expected

    @given(value=st.floats(min_value=0, max_value=1e6, allow_nan=False))
    def test_rounded_value_is_within_half_unit(self, value: float) -> None:
        assert abs(round_half_up(value, 1) - value) <= 0.05 + 1e-9


class TestToUtc:
    def test_naive_timestamp_is_taken_as_utc(self) -> None:
        naive = datetime(2026, 1, 1, 8, 30)
        assert to_utc(naive) == datetime(2026, 1, 1, 8, 30, tzinfo=UTC)

    def test_aware_timestamp_is_converted(self) -> None:
        plus_two = datetime(2026, 1, 1, 8, 30, tzinfo=timezone(timedelta(hours=2)))
        converted = to_utc(plus_two)
        assert converted.tzinfo == UTC
        assert converted.hour == 6


class TestHealthRecord:
    def test_record_immutability(self) -> None:
        record = HealthRecord(
            id="record-0",
            age=40,
            heart_rate=72,
            step_count=5000,
            glucose_level=110,
            has_diabetes=False,
            gender=Gender.FEMALE,
            timestamp=datetime(2026, 1, 1, tzinfo=UTC),
        )

        with pytest.raises(ValueError, match="frozen"):
            record.age = 41  # type: ignore

    def test_gender_accepts_plain_strings(self) -> None:
        record = HealthRecord(
            id="record-1",
            age=40,
            heart_rate=72,
            step_count=5000,
            glucose_level=110,
            has_diabetes=True,
            gender="male",
            timestamp=datetime(2026, 1, 1, tzinfo=UTC),
        )
        assert record.gender is Gender.MALE


class TestDerivedModels:
    def test_age_group_requires_members(self) -> None:
        with pytest.raises(ValueError):
            AgeGroup(age_range="20-29", min_age=20, max_age=29, count=0, average_heart_rate=0.0)

    def test_diabetes_rate_is_a_percentage(self) -> None:
        with pytest.raises(ValueError):
            HealthMetrics(
                total_records=1,
                average_heart_rate=70.0,
                average_step_count=5000,
                average_glucose=100.0,
                diabetes_rate=150.0,
            )
