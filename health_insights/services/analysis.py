"""
Orchestration entry point for health data analysis.

Runs the four transforms over one immutable record sequence and bundles
their outputs for the presentation layer:
1. Bucket records by age
2. Summarize the whole population
3. Aggregate daily activity
4. Evaluate insight rules against the population and its summary

Everything is recomputed from scratch on each call; for a fixed evaluation
instant the same input always produces an identical bundle.
"""

import time
from collections.abc import Sequence
from datetime import UTC, datetime

import structlog

from health_insights.config import AppConfig, InsightThresholds, TrendConfig
from health_insights.domain.models import AgeGroup, AnalysisBundle, HealthRecord, to_utc
from health_insights.services.age_buckets import AgeBucketizer
from health_insights.services.global_metrics import GlobalMetricsCalculator
from health_insights.services.insight_rules import InsightRuleEngine
from health_insights.services.temporal_trends import TemporalTrendAggregator

logger = structlog.get_logger(__name__)


class HealthDataAnalyzer:
    """Composes the age, metrics, trend and insight transforms."""

    def __init__(
        self,
        thresholds: InsightThresholds | None = None,
        trend_config: TrendConfig | None = None,
    ) -> None:
        self.age_bucketizer = AgeBucketizer()
        self.metrics_calculator = GlobalMetricsCalculator()
        self.trend_aggregator = TemporalTrendAggregator(trend_config)
        self.rule_engine = InsightRuleEngine(thresholds)
        self.logger = logger.bind(component="health_data_analyzer")

    @classmethod
    def from_config(cls, config: AppConfig) -> "HealthDataAnalyzer":
        return cls(thresholds=config.insights, trend_config=config.trends)

    def analyze(
        self, records: Sequence[HealthRecord], now: datetime | None = None
    ) -> AnalysisBundle:
        """
        Produce the full analysis bundle for a record sequence.

        ``now`` is the instant the recency rule measures from; pass it
        explicitly to make repeated calls reproducible.
        """
        start_time = time.perf_counter()
        evaluated_at = to_utc(now) if now else datetime.now(UTC)
        records = tuple(records)

        age_groups = self.age_bucketizer.bucketize(records)
        metrics = self.metrics_calculator.calculate(records)
        step_trends = self.trend_aggregator.aggregate(records)
        insights = self.rule_engine.evaluate(records, metrics, evaluated_at)

        bundle = AnalysisBundle(
            age_groups=age_groups,
            metrics=metrics,
            step_trends=step_trends,
            insights=insights,
            step_count_by_age=step_count_view(age_groups),
        )

        self.logger.info(
            "health_data_analyzed",
            evaluated_at=evaluated_at.isoformat(),
            total_records=metrics.total_records,
            age_groups=len(age_groups),
            trend_days=len(step_trends),
            insufficient_data=metrics.insufficient_data,
            duration_seconds=round(time.perf_counter() - start_time, 3),
        )
        return bundle


def step_count_view(age_groups: Sequence[AgeGroup]) -> list[AgeGroup]:
    """Copy age groups with a defined (possibly zero) average step count."""
    return [
        group.model_copy(update={"average_step_count": group.average_step_count or 0})
        for group in age_groups
    ]


def process_health_data(
    records: Sequence[HealthRecord],
    now: datetime | None = None,
    config: AppConfig | None = None,
) -> AnalysisBundle:
    """Analyze records with default settings, or with ``config`` when given."""
    analyzer = HealthDataAnalyzer.from_config(config) if config else HealthDataAnalyzer()
    return analyzer.analyze(records, now=now)
