"""
Domain models for population health analysis.

These models represent the core business concepts and are framework-agnostic.
They use Pydantic for typing and immutability; values are assumed to be
pre-validated by whatever ingests them.
"""

from datetime import UTC, date, datetime
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

INSUFFICIENT_DATA = "Insufficient data"


class Gender(str, Enum):
    """Recorded gender of a subject."""

    MALE = "male"
    FEMALE = "female"


class Trend(str, Enum):
    """Qualitative direction attached to a derived statistic."""

    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class HealthRecord(BaseModel):
    """One observation of one subject."""

    model_config = ConfigDict(frozen=True)  # Shared read-only across all transforms

    id: str
    age: int
    heart_rate: int = Field(description="Beats per minute")
    step_count: int = Field(description="Daily steps")
    glucose_level: int = Field(description="mg/dL")
    has_diabetes: bool
    gender: Gender
    timestamp: datetime


class AgeGroup(BaseModel):
    """Averaged statistics for one fixed age bin."""

    model_config = ConfigDict(frozen=True)

    age_range: str
    min_age: int
    max_age: int
    count: int = Field(gt=0)
    average_heart_rate: float
    average_step_count: int | None = None


class HealthMetrics(BaseModel):
    """Whole-population summary statistics."""

    model_config = ConfigDict(frozen=True)

    total_records: int = Field(ge=0)
    average_heart_rate: float
    average_step_count: int
    average_glucose: float
    diabetes_rate: float = Field(ge=0.0, le=100.0, description="Percentage of subjects")
    insufficient_data: bool = False


class DayTrend(BaseModel):
    """Average activity for one calendar day."""

    model_config = ConfigDict(frozen=True)

    date: date
    average_steps: int
    count: int = Field(gt=0)


class Insight(BaseModel):
    """A single rule-derived, human-readable finding."""

    model_config = ConfigDict(frozen=True)

    title: str
    value: str
    description: str
    trend: Trend
    insufficient_data: bool = False


class AnalysisBundle(BaseModel):
    """Everything the presentation layer needs from one analysis run."""

    model_config = ConfigDict(frozen=True)

    age_groups: list[AgeGroup]
    metrics: HealthMetrics
    step_trends: list[DayTrend]
    insights: list[Insight]
    step_count_by_age: list[AgeGroup]


def round_half_up(value: float, digits: int = 0) -> float:
    """Round using half-up on the decimal representation (2.45 -> 2.5, not 2.4)."""
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def to_utc(moment: datetime) -> datetime:
    """Return an aware UTC datetime; naive values are taken to already be UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)
