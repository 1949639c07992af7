"""
Age bucketing of health records.

Records are partitioned into fixed, ordered, non-overlapping bins covering
every age from 20 up; subjects younger than 20 fall outside every bin.
"""

from collections.abc import Sequence
from typing import NamedTuple

import structlog

from health_insights.domain.models import AgeGroup, HealthRecord, round_half_up

logger = structlog.get_logger(__name__)


class AgeBin(NamedTuple):
    label: str
    min_age: int
    max_age: int
    open_ended: bool = False

    def contains(self, age: int) -> bool:
        if self.open_ended:
            return age >= self.min_age
        return self.min_age <= age <= self.max_age


# "70+" reports 100 as its upper bound but admits any older subject
AGE_BINS: tuple[AgeBin, ...] = (
    AgeBin("20-29", 20, 29),
    AgeBin("30-39", 30, 39),
    AgeBin("40-49", 40, 49),
    AgeBin("50-59", 50, 59),
    AgeBin("60-69", 60, 69),
    AgeBin("70+", 70, 100, open_ended=True),
)


class AgeBucketizer:
    """Computes per-bin heart rate and step count averages."""

    def __init__(self, bins: Sequence[AgeBin] = AGE_BINS) -> None:
        self.bins = tuple(bins)
        self.logger = logger.bind(component="age_bucketizer")

    def bucketize(self, records: Sequence[HealthRecord]) -> list[AgeGroup]:
        """Return one AgeGroup per non-empty bin, in bin order."""
        groups: list[AgeGroup] = []

        for age_bin in self.bins:
            in_range = [r for r in records if age_bin.contains(r.age)]
            if not in_range:
                continue

            count = len(in_range)
            groups.append(
                AgeGroup(
                    age_range=age_bin.label,
                    min_age=age_bin.min_age,
                    max_age=age_bin.max_age,
                    count=count,
                    average_heart_rate=round_half_up(
                        sum(r.heart_rate for r in in_range) / count, 1
                    ),
                    average_step_count=int(
                        round_half_up(sum(r.step_count for r in in_range) / count)
                    ),
                )
            )

        self.logger.debug(
            "age_groups_computed",
            groups=len(groups),
            bucketed_records=sum(g.count for g in groups),
            total_records=len(records),
        )
        return groups
