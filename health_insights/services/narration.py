"""
Narrative text built from analysis results.

Produces the plain text a speech synthesizer or story view would present.
Audio generation itself belongs to the presentation layer.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from health_insights.domain.models import HealthMetrics, Insight, Trend

NARRATIVE_INTRO = (
    "Welcome to your AI Health Assistant. "
    "Let me share some important insights from your health data."
)
NARRATIVE_OUTRO = (
    "These insights can help guide your health decisions. "
    "Remember to consult with healthcare professionals for personalized advice."
)
NO_INSIGHTS_NARRATIVE = "No health insights available for narration."

_TREND_PHRASES = {
    Trend.POSITIVE: "positive trend",
    Trend.NEGATIVE: "concerning trend",
    Trend.NEUTRAL: "stable pattern",
}


@dataclass
class StoryChapter:
    """One section of the data story."""

    title: str
    content: str
    highlight: str


def narrate_insight(insight: Insight) -> str:
    if insight.insufficient_data:
        return f"{insight.title}: {insight.description}"
    return (
        f"{insight.title}: {insight.description} This shows a "
        f"{_TREND_PHRASES[insight.trend]} with a value of {insight.value}."
    )


def build_narrative(insights: Sequence[Insight]) -> str:
    """Join the insights into one spoken-style paragraph."""
    if not insights:
        return NO_INSIGHTS_NARRATIVE

    return " ".join([NARRATIVE_INTRO, *(narrate_insight(i) for i in insights), NARRATIVE_OUTRO])


def build_story_chapters(metrics: HealthMetrics) -> list[StoryChapter]:
    """Build the five-chapter story for a population summary."""
    if metrics.insufficient_data:
        landscape = StoryChapter(
            title="The Health Landscape",
            content=(
                "No health records have been loaded yet, so there is no community picture "
                "to describe. Load a dataset to see averages for heart rate and daily activity."
            ),
            highlight="No Records Analyzed",
        )
        glucose = StoryChapter(
            title="The Glucose Connection",
            content=(
                "Glucose levels and diabetes prevalence cannot be summarized without "
                "health records."
            ),
            highlight="Insufficient Data",
        )
    else:
        landscape = StoryChapter(
            title="The Health Landscape",
            content=(
                f"Our analysis reveals patterns from {metrics.total_records:,} health records, "
                f"painting a comprehensive picture of community health. With an average heart "
                f"rate of {metrics.average_heart_rate} bpm and daily step counts averaging "
                f"{metrics.average_step_count:,}, we can identify both opportunities and "
                f"challenges in public health."
            ),
            highlight=f"{metrics.total_records:,} Records Analyzed",
        )
        glucose = StoryChapter(
            title="The Glucose Connection",
            content=(
                f"Glucose levels tell a compelling story about metabolic health. With "
                f"{metrics.average_glucose} mg/dL average glucose levels and a "
                f"{metrics.diabetes_rate}% diabetes rate, we see clear opportunities for "
                f"targeted health interventions and lifestyle modifications."
            ),
            highlight=f"{metrics.diabetes_rate}% Diabetes Rate",
        )

    return [
        landscape,
        StoryChapter(
            title="The Activity Story",
            content=(
                "Physical activity patterns show that step count tends to fall with age. "
                "Younger adults average more daily steps than older demographics, and this "
                "decline correlates with increased health risks."
            ),
            highlight="Step Count Decreases with Age",
        ),
        StoryChapter(
            title="The Heart Rate Connection",
            content=(
                "Average resting heart rate tends to rise with age, indicating cardiovascular "
                "changes over time. Combined with decreased physical activity, this highlights "
                "the need for age-specific cardiovascular monitoring."
            ),
            highlight="Heart Rate Increases with Age",
        ),
        glucose,
        StoryChapter(
            title="The Path Forward",
            content=(
                "These insights point toward actionable health strategies: increased physical "
                "activity programs, age-specific screening protocols, and glucose monitoring "
                "initiatives."
            ),
            highlight="Evidence-Based Solutions",
        ),
    ]
