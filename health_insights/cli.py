"""
Console report for a synthetic health population.

Generates sample records, runs the full analysis and renders every view:
age groups, summary metrics, daily step trends and insights.

Run with: uv run health-insights --count 500 --seed 42
"""

import argparse
import sys

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from health_insights.config import AppConfig, config_summary, get_config
from health_insights.domain.models import AnalysisBundle, Trend
from health_insights.logging_setup import configure_logging
from health_insights.services.analysis import HealthDataAnalyzer
from health_insights.services.narration import build_narrative, build_story_chapters
from health_insights.services.sample_data import generate_health_records

console = Console()

TREND_STYLES = {
    Trend.POSITIVE: "green",
    Trend.NEGATIVE: "red",
    Trend.NEUTRAL: "yellow",
}


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="health-insights",
        description="Analyze a synthetic population of health records.",
    )
    parser.add_argument("--count", type=int, help="Number of records (default: from config)")
    parser.add_argument("--seed", type=int, help="Seed for a reproducible population")
    parser.add_argument("--json", action="store_true", help="Print the analysis bundle as JSON")
    parser.add_argument("--narrate", action="store_true", help="Print the narrative text")
    parser.add_argument("--story", action="store_true", help="Print the data story chapters")
    parser.add_argument(
        "--show-config", action="store_true", help="Print the effective configuration"
    )
    return parser


def render_config(config: AppConfig) -> None:
    for section, values in config_summary(config).items():
        table = Table(title=section)
        table.add_column("Setting", style="cyan")
        table.add_column("Value", style="green")
        for name, value in values.items():
            table.add_row(name, str(value))
        console.print(table)


def render_bundle(bundle: AnalysisBundle) -> None:
    metrics = bundle.metrics
    console.print(Panel("Population Summary", style="blue"))
    if metrics.insufficient_data:
        console.print("No records to summarize", style="yellow")
    else:
        console.print(f"Records: {metrics.total_records:,}")
        console.print(f"Average heart rate: {metrics.average_heart_rate} bpm")
        console.print(f"Average step count: {metrics.average_step_count:,}")
        console.print(f"Average glucose: {metrics.average_glucose} mg/dL")
        console.print(f"Diabetes rate: {metrics.diabetes_rate}%")

    table = Table(title="Age Groups")
    table.add_column("Age Range", style="cyan")
    table.add_column("Count", style="magenta")
    table.add_column("Avg Heart Rate", style="green")
    table.add_column("Avg Steps", style="yellow")
    for group in bundle.step_count_by_age:
        table.add_row(
            group.age_range,
            str(group.count),
            f"{group.average_heart_rate:.1f}",
            f"{group.average_step_count:,}",
        )
    console.print(table)

    table = Table(title="Daily Step Trends")
    table.add_column("Date", style="cyan")
    table.add_column("Records", style="magenta")
    table.add_column("Avg Steps", style="yellow")
    for day in bundle.step_trends:
        table.add_row(str(day.date), str(day.count), f"{day.average_steps:,}")
    console.print(table)

    console.print(Panel("Insights", style="blue"))
    for insight in bundle.insights:
        console.print(
            f"{insight.title}: [bold]{insight.value}[/bold] ({insight.trend.value})",
            style=TREND_STYLES[insight.trend],
        )
        console.print(f"  {insight.description}")


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the application."""
    args = create_parser().parse_args(argv)

    try:
        config = get_config()
    except ValueError as e:
        console.print(f"Configuration error: {escape(str(e))}", style="red")
        return 1

    configure_logging(config.logging)

    if args.show_config:
        render_config(config)

    count = args.count if args.count is not None else config.sample_data.record_count
    seed = args.seed if args.seed is not None else config.sample_data.seed

    try:
        records = generate_health_records(
            count=count, seed=seed, history_days=config.sample_data.history_days
        )
    except ValueError as e:
        console.print(f"Invalid sample settings: {escape(str(e))}", style="red")
        return 1

    bundle = HealthDataAnalyzer.from_config(config).analyze(records)

    if args.json:
        console.out(bundle.model_dump_json(indent=2), highlight=False)
    else:
        render_bundle(bundle)

    if args.story:
        console.print(Panel("Health Data Story", style="blue"))
        for number, chapter in enumerate(build_story_chapters(bundle.metrics), 1):
            console.print(f"{number}. {chapter.title} - {chapter.highlight}", style="bold")
            console.print(f"   {chapter.content}")

    if args.narrate:
        console.print(Panel(build_narrative(bundle.insights), title="Narration"))

    return 0


if __name__ == "__main__":
    sys.exit(main())
