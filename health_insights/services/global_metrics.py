"""Whole-population summary statistics."""

from collections.abc import Sequence

import structlog

from health_insights.domain.models import HealthMetrics, HealthRecord, round_half_up

logger = structlog.get_logger(__name__)


class GlobalMetricsCalculator:
    """Computes averages and the diabetes rate over every record."""

    def __init__(self) -> None:
        self.logger = logger.bind(component="global_metrics_calculator")

    def calculate(self, records: Sequence[HealthRecord]) -> HealthMetrics:
        """
        Summarize the population.

        An empty population has no defined averages; it yields zeroed fields
        with ``insufficient_data`` set instead of NaN.
        """
        total = len(records)
        if total == 0:
            self.logger.warning("metrics_insufficient_data", total_records=0)
            return HealthMetrics(
                total_records=0,
                average_heart_rate=0.0,
                average_step_count=0,
                average_glucose=0.0,
                diabetes_rate=0.0,
                insufficient_data=True,
            )

        diabetic = sum(1 for r in records if r.has_diabetes)
        metrics = HealthMetrics(
            total_records=total,
            average_heart_rate=round_half_up(sum(r.heart_rate for r in records) / total, 1),
            average_step_count=int(round_half_up(sum(r.step_count for r in records) / total)),
            average_glucose=round_half_up(sum(r.glucose_level for r in records) / total, 1),
            diabetes_rate=round_half_up(diabetic / total * 100, 1),
        )

        self.logger.debug("metrics_computed", **metrics.model_dump())
        return metrics
