"""structlog setup shared by scripts and embedding applications."""

import logging
import sys

import structlog

from .config import settings


def configure_logging(level: str = None, fmt: str = None) -> None:
    """
    Configure stdlib logging and structlog.

    Args:
        level: Log level name, defaults to ``settings.log_level``
        fmt: ``"json"`` for JSON lines, anything else for console output
    """
    level = (level or settings.log_level).upper()
    fmt = fmt or settings.log_format

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    renderer = (
        structlog.processors.JSONRenderer()
        if fmt == "json"
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
