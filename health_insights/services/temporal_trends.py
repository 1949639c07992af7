"""
Daily activity trend aggregation.

Records are grouped by the calendar day of their timestamp as seen in a
configured timezone. Days without records are absent from the output, so
consumers must treat the series as sparse.
"""

from collections import defaultdict
from collections.abc import Sequence
from datetime import date
from zoneinfo import ZoneInfo

import structlog

from health_insights.config import TrendConfig
from health_insights.domain.models import DayTrend, HealthRecord, round_half_up, to_utc

logger = structlog.get_logger(__name__)


class TemporalTrendAggregator:
    """Computes the mean step count per calendar day."""

    def __init__(self, config: TrendConfig | None = None) -> None:
        self.config = config or TrendConfig()
        self.timezone = ZoneInfo(self.config.day_boundary_timezone)
        self.logger = logger.bind(
            component="temporal_trend_aggregator", timezone=self.config.day_boundary_timezone
        )

    def day_of(self, record: HealthRecord) -> date:
        """Calendar day of a record in the configured timezone."""
        return to_utc(record.timestamp).astimezone(self.timezone).date()

    def aggregate(self, records: Sequence[HealthRecord]) -> list[DayTrend]:
        """Return one DayTrend per day present, ascending by date."""
        steps_by_day: defaultdict[date, list[int]] = defaultdict(list)
        for record in records:
            steps_by_day[self.day_of(record)].append(record.step_count)

        trends = [
            DayTrend(
                date=day,
                average_steps=int(round_half_up(sum(steps) / len(steps))),
                count=len(steps),
            )
            for day, steps in sorted(steps_by_day.items())
        ]

        self.logger.debug(
            "step_trends_computed",
            days=len(trends),
            first_day=str(trends[0].date) if trends else None,
            last_day=str(trends[-1].date) if trends else None,
        )
        return trends
