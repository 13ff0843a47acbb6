"""
Structured logging with structlog.

The API logs JSON lines to stdout; the CLI sends the same events to stderr so
the cleaned text on stdout can be piped.
"""

import logging
import sys
from typing import Optional, TextIO

import structlog

from .config import settings


def setup_logging(stream: Optional[TextIO] = None) -> None:
    """
    Configure structlog from settings.log_level and settings.log_json.

    Request-scoped values bound with structlog.contextvars (the API binds a
    request id) are merged into every event.

    Args:
        stream: Destination for log lines, stdout when omitted
    """
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if settings.log_json:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(settings.log_level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stdout),
        cache_logger_on_first_use=True,
    )
