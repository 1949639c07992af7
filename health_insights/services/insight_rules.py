"""
Rule-based insight generation.

Key design decisions:
- Fixed rule order: callers and narration rely on eight insights in a stable sequence
- Independent rules: each rule filters its own cohorts, no shared mutable state
- Tunable thresholds: every cut-off comes from InsightThresholds
- No NaN in text: an empty cohort produces an explicit "insufficient data" insight
"""

import math
from collections.abc import Callable, Sequence
from datetime import UTC, datetime, timedelta

import structlog

from health_insights.config import InsightThresholds
from health_insights.domain.models import (
    INSUFFICIENT_DATA,
    Gender,
    HealthMetrics,
    HealthRecord,
    Insight,
    Trend,
    round_half_up,
    to_utc,
)

logger = structlog.get_logger(__name__)

Rule = Callable[[Sequence[HealthRecord], HealthMetrics, datetime], Insight]


def _mean(values: Sequence[float]) -> float | None:
    if not values:
        return None
    return sum(values) / len(values)


def _rate(matching: int, total: int) -> float | None:
    """Percentage of a cohort, or None for an empty cohort."""
    if total == 0:
        return None
    return matching / total * 100


def _percent_change(baseline: float | None, current: float | None) -> float | None:
    if baseline is None or current is None or baseline == 0:
        return None
    return (current - baseline) / baseline * 100


def _one_decimal(value: float) -> str:
    # + 0.0 turns a rounded -0.0 into 0.0
    return f"{round_half_up(value, 1) + 0.0:.1f}"


def _percent(value: float) -> str:
    return f"{_one_decimal(value)}%"


def _signed_percent(value: float) -> str:
    return f"{round_half_up(value, 1) + 0.0:+.1f}%"


class InsightRuleEngine:
    """
    Runs the fixed battery of comparative and statistical rules.

    Every rule returns exactly one Insight, so evaluate() always yields
    eight insights in the same order for any input, including an empty one.
    """

    def __init__(self, thresholds: InsightThresholds | None = None) -> None:
        self.thresholds = thresholds or InsightThresholds()
        self.logger = logger.bind(component="insight_rule_engine")
        self.rules: tuple[Rule, ...] = (
            self.heart_rate_vs_age,
            self.step_count_vs_age,
            self.age_risk_factor,
            self.activity_level,
            self.heart_rate_variability,
            self.glucose_levels,
            self.gender_distribution,
            self.recent_activity_trend,
        )

    def evaluate(
        self,
        records: Sequence[HealthRecord],
        metrics: HealthMetrics,
        now: datetime | None = None,
    ) -> list[Insight]:
        """Run every rule in order against the population and its metrics."""
        evaluated_at = to_utc(now) if now else datetime.now(UTC)
        insights = [rule(records, metrics, evaluated_at) for rule in self.rules]

        self.logger.info(
            "insights_generated",
            count=len(insights),
            insufficient=sum(1 for i in insights if i.insufficient_data),
            total_records=len(records),
        )
        return insights

    def _insufficient(self, title: str, description: str) -> Insight:
        self.logger.warning("insight_cohort_empty", rule=title)
        return Insight(
            title=title,
            value=INSUFFICIENT_DATA,
            description=description,
            trend=Trend.NEUTRAL,
            insufficient_data=True,
        )

    def _young(self, records: Sequence[HealthRecord]) -> list[HealthRecord]:
        return [r for r in records if r.age < self.thresholds.young_age_limit]

    def _older(self, records: Sequence[HealthRecord]) -> list[HealthRecord]:
        return [r for r in records if r.age >= self.thresholds.older_age_start]

    def _age_labels(self) -> tuple[str, str]:
        return f"<{self.thresholds.young_age_limit}", f"{self.thresholds.older_age_start}+"

    def heart_rate_vs_age(
        self, records: Sequence[HealthRecord], metrics: HealthMetrics, now: datetime
    ) -> Insight:
        title = "Heart Rate vs Age Trend"
        young_label, older_label = self._age_labels()
        change = _percent_change(
            _mean([r.heart_rate for r in self._young(records)]),
            _mean([r.heart_rate for r in self._older(records)]),
        )
        if change is None:
            return self._insufficient(
                title,
                f"Heart rates can only be compared with subjects both under "
                f"{self.thresholds.young_age_limit} and aged {older_label}.",
            )

        direction = "increases" if change >= 0 else "decreases"
        return Insight(
            title=title,
            value=_signed_percent(change),
            description=(
                f"Heart rate {direction} by {_percent(abs(change))} from young adults "
                f"({young_label}) to older adults ({older_label}), showing cardiovascular "
                f"changes with aging."
            ),
            trend=Trend.NEGATIVE,
        )

    def step_count_vs_age(
        self, records: Sequence[HealthRecord], metrics: HealthMetrics, now: datetime
    ) -> Insight:
        title = "Step Count vs Age Trend"
        _, older_label = self._age_labels()
        change = _percent_change(
            _mean([r.step_count for r in self._young(records)]),
            _mean([r.step_count for r in self._older(records)]),
        )
        if change is None:
            return self._insufficient(
                title,
                f"Step counts can only be compared with subjects both under "
                f"{self.thresholds.young_age_limit} and aged {older_label}.",
            )

        if change <= 0:
            direction, activity = "decreases", "reduced"
        else:
            direction, activity = "increases", "increased"
        return Insight(
            title=title,
            value=_signed_percent(change),
            description=(
                f"Daily step count {direction} by {_percent(abs(change))} from young to older "
                f"adults, indicating {activity} physical activity with age."
            ),
            trend=Trend.NEGATIVE,
        )

    def age_risk_factor(
        self, records: Sequence[HealthRecord], metrics: HealthMetrics, now: datetime
    ) -> Insight:
        title = "Age Risk Factor"
        _, older_label = self._age_labels()
        older = self._older(records)
        rate = _rate(sum(1 for r in older if r.has_diabetes), len(older))
        if rate is None:
            return self._insufficient(
                title, f"No subjects aged {older_label} to estimate age-related diabetes risk."
            )

        return Insight(
            title=title,
            value=_percent(rate),
            description=(
                f"{_percent(rate)} of adults {older_label} have diabetes, indicating age as "
                f"a key risk factor."
            ),
            trend=(
                Trend.NEGATIVE if rate > self.thresholds.older_diabetes_risk_rate else Trend.NEUTRAL
            ),
        )

    def activity_level(
        self, records: Sequence[HealthRecord], metrics: HealthMetrics, now: datetime
    ) -> Insight:
        title = "Activity Level"
        threshold = self.thresholds.active_step_threshold
        rate = _rate(sum(1 for r in records if r.step_count >= threshold), len(records))
        if rate is None:
            return self._insufficient(title, "No subjects available to measure activity levels.")

        return Insight(
            title=title,
            value=_percent(rate),
            description=(
                f"{_percent(rate)} of users meet the recommended daily step count of "
                f"{threshold:,} steps."
            ),
            trend=Trend.POSITIVE if rate > self.thresholds.active_rate_target else Trend.NEGATIVE,
        )

    def heart_rate_variability(
        self, records: Sequence[HealthRecord], metrics: HealthMetrics, now: datetime
    ) -> Insight:
        title = "Heart Rate Variability"
        if not records:
            return self._insufficient(
                title, "No heart rate readings available to measure variability."
            )

        # Population standard deviation around the reported (rounded) average
        variance = sum((r.heart_rate - metrics.average_heart_rate) ** 2 for r in records) / len(
            records
        )
        std_dev = math.sqrt(variance)

        return Insight(
            title=title,
            value=f"±{_one_decimal(std_dev)} bpm",
            description=(
                "Heart rate variability indicates cardiovascular health. Lower variability "
                "may suggest better fitness."
            ),
            trend=(
                Trend.POSITIVE
                if std_dev < self.thresholds.heart_rate_variability_limit
                else Trend.NEUTRAL
            ),
        )

    def glucose_levels(
        self, records: Sequence[HealthRecord], metrics: HealthMetrics, now: datetime
    ) -> Insight:
        title = "Glucose Levels"
        threshold = self.thresholds.elevated_glucose_threshold
        rate = _rate(sum(1 for r in records if r.glucose_level > threshold), len(records))
        if rate is None:
            return self._insufficient(title, "No glucose readings available.")

        return Insight(
            title=title,
            value=_percent(rate),
            description=(
                f"Percentage of individuals with elevated glucose levels (>{threshold} mg/dL), "
                f"indicating pre-diabetic or diabetic conditions."
            ),
            trend=(
                Trend.NEGATIVE
                if rate > self.thresholds.elevated_glucose_rate_limit
                else Trend.POSITIVE
            ),
        )

    def gender_distribution(
        self, records: Sequence[HealthRecord], metrics: HealthMetrics, now: datetime
    ) -> Insight:
        title = "Gender Distribution"
        males = [r for r in records if r.gender == Gender.MALE]
        females = [r for r in records if r.gender == Gender.FEMALE]
        male_rate = _rate(sum(1 for r in males if r.has_diabetes), len(males))
        female_rate = _rate(sum(1 for r in females if r.has_diabetes), len(females))
        if male_rate is None or female_rate is None:
            return self._insufficient(
                title, "Both male and female subjects are needed to compare diabetes rates."
            )

        if male_rate > female_rate:
            comparison = "Males show higher prevalence."
        elif female_rate > male_rate:
            comparison = "Females show higher prevalence."
        else:
            comparison = "Males and females show equal prevalence."

        return Insight(
            title=title,
            value=_percent(abs(male_rate - female_rate)),
            description=f"Diabetes rate difference between genders. {comparison}",
            trend=Trend.NEUTRAL,
        )

    def recent_activity_trend(
        self, records: Sequence[HealthRecord], metrics: HealthMetrics, now: datetime
    ) -> Insight:
        title = "Recent Activity Trend"
        window_days = self.thresholds.recent_window_days
        window = timedelta(days=window_days)
        recent_mean = _mean(
            [r.step_count for r in records if now - to_utc(r.timestamp) <= window]
        )
        if recent_mean is None:
            return self._insufficient(
                title, f"No activity recorded in the last {window_days} days."
            )

        trend = Trend.POSITIVE if recent_mean > metrics.average_step_count else Trend.NEGATIVE
        change = "increased" if trend is Trend.POSITIVE else "decreased"
        return Insight(
            title=title,
            value=f"{int(round_half_up(abs(recent_mean - metrics.average_step_count)))}",
            description=(
                f"Recent {window_days}-day average shows {change} activity compared to "
                f"overall average."
            ),
            trend=trend,
        )
