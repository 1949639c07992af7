"""Structured logging setup shared by the services and the CLI."""

import logging

import structlog

from health_insights.config import LoggingConfig


def _install_processors(renderer) -> None:
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging(config: LoggingConfig | None = None) -> None:
    """Install the structlog processor chain for the configured format and level."""
    config = config or LoggingConfig()

    logging.basicConfig(format="%(message)s")
    logging.getLogger().setLevel(getattr(logging, config.level))

    renderer = (
        structlog.processors.JSONRenderer()
        if config.format == "json"
        else structlog.dev.ConsoleRenderer()
    )
    _install_processors(renderer)


# Route through stdlib logging on import; handlers and level stay with the host application
_install_processors(structlog.processors.JSONRenderer())
