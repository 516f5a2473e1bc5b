"""structlog setup for the service and scripts."""

import logging

import structlog


def configure_logging(level: str | int = logging.INFO) -> None:
    """Install console logging with level filtering.

    Args:
        level: Minimum level, as a logging constant or a name like "DEBUG"
    """
    if isinstance(level, str):
        level = logging.getLevelNamesMapping().get(level.upper(), logging.INFO)

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )
