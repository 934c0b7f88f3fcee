"""Logging setup for the command line entry point."""

import logging
import sys

import structlog


def configure_logging(level: str = "WARNING") -> None:
    """Route structlog events through stdlib logging to stderr.

    Args:
        level: Name of the minimum level to emit (DEBUG, INFO, WARNING, ...)

    Raises:
        ValueError: If level is not a known logging level name
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level '{level}'")

    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=numeric_level, force=True)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )
