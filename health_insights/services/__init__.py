"""
Core services for the application.

This package contains the transforms that derive age groups, summary metrics,
daily trends and insights from health records, plus their orchestration.
"""

from .age_buckets import AGE_BINS, AgeBin, AgeBucketizer
from .analysis import HealthDataAnalyzer, process_health_data, step_count_view
from .global_metrics import GlobalMetricsCalculator
from .insight_rules import InsightRuleEngine
from .narration import StoryChapter, build_narrative, build_story_chapters
from .sample_data import generate_health_records
from .temporal_trends import TemporalTrendAggregator

__all__ = [
    "AGE_BINS",
    "AgeBin",
    "AgeBucketizer",
    "GlobalMetricsCalculator",
    "TemporalTrendAggregator",
    "InsightRuleEngine",
    "HealthDataAnalyzer",
    "process_health_data",
    "step_count_view",
    "generate_health_records",
    "StoryChapter",
    "build_narrative",
    "build_story_chapters",
]
