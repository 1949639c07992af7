"""Aggregation and insight logic for population health measurements.

This package contains the pure transforms that turn health records into
age-bucketed averages, summary metrics, daily trends and rule-based insights,
isolated from ingestion and presentation concerns for easy testing.
"""

from health_insights import logging_setup  # noqa: F401
