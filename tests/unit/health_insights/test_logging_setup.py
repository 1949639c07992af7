"""Tests for structlog configuration."""

import importlib
import logging

import pytest
import structlog

from health_insights import logging_setup
from health_insights.config import LoggingConfig
from health_insights.logging_setup import configure_logging
from health_insights.services.analysis import process_health_data


@pytest.mark.parametrize("fmt", ["json", "console"])
def test_configure_logging_installs_renderer(fmt: str) -> None:
    configure_logging(LoggingConfig(level="WARNING", format=fmt))

    processors = structlog.get_config()["processors"]
    expected = structlog.processors.JSONRenderer if fmt == "json" else structlog.dev.ConsoleRenderer
    assert isinstance(processors[-1], expected)
    assert logging.getLogger().level == logging.WARNING


def test_configure_logging_defaults() -> None:
    configure_logging()

    assert logging.getLogger().level == logging.INFO


def test_import_routes_through_stdlib() -> None:
    structlog.reset_defaults()
    importlib.reload(logging_setup)

    config = structlog.get_config()
    assert isinstance(config["logger_factory"], structlog.stdlib.LoggerFactory)
    assert config["processors"][0] is structlog.stdlib.filter_by_level


def test_library_analysis_keeps_stdout_clean(three_subjects, now, capsys) -> None:
    process_health_data(three_subjects, now=now)
    process_health_data([], now=now)

    assert capsys.readouterr().out == ""
