"""
Synthetic population generation.

Produces plausible health records for demos and tests. Each call builds a
fresh list from its own random generator; nothing is generated at import time.
"""

import random
from datetime import UTC, datetime, timedelta

import structlog

from health_insights.domain.models import Gender, HealthRecord, to_utc

logger = structlog.get_logger(__name__)


def _base_heart_rate(age: int) -> int:
    if age > 60:
        return 75
    if age > 40:
        return 70
    return 68


def generate_health_records(
    count: int = 500,
    seed: int | None = None,
    now: datetime | None = None,
    history_days: int = 30,
) -> list[HealthRecord]:
    """
    Generate ``count`` records spread over the last ``history_days`` days.

    Args:
        count: Number of records to generate
        seed: Seed for a reproducible population; None draws fresh entropy
        now: Reference instant for timestamps (defaults to the current time)
        history_days: Timestamps fall between ``now`` and this many days earlier

    Returns:
        list[HealthRecord]: Records with ids ``record-0`` .. ``record-<count-1>``
    """
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    if history_days <= 0:
        raise ValueError(f"history_days must be positive, got {history_days}")

    rng = random.Random(seed)
    reference = to_utc(now) if now else datetime.now(UTC)

    records = []
    for i in range(count):
        age = rng.randrange(20, 80)
        # Older subjects have a higher baseline heart rate and diabetes risk
        heart_rate = _base_heart_rate(age) + rng.randrange(30)
        step_count = rng.randrange(2000, 10000)
        glucose_level = rng.randrange(70, 170)
        has_diabetes = rng.random() < (0.15 if age > 50 else 0.05)
        gender = Gender.MALE if rng.random() < 0.5 else Gender.FEMALE
        timestamp = reference - timedelta(days=rng.randrange(history_days))

        records.append(
            HealthRecord(
                id=f"record-{i}",
                age=age,
                heart_rate=heart_rate,
                step_count=step_count,
                glucose_level=glucose_level,
                has_diabetes=has_diabetes,
                gender=gender,
                timestamp=timestamp,
            )
        )

    logger.info("sample_records_generated", count=count, seed=seed, history_days=history_days)
    return records
