"""Logging configuration.

Standard library logging for module loggers plus structlog for structured
events (audit trail, unhandled exceptions). Console rendering in
development, JSON when LOG_FORMAT=json.
"""

import logging
import sys

import structlog
from structlog.types import EventDict, Processor

from account_service.core.config import Settings

# Keys whose values must never reach a log sink
_SENSITIVE_MARKERS = ("password", "token", "secret", "authorization")
_PROTECTED_KEYS = frozenset({"event", "level", "timestamp", "logger"})


def redact_sensitive_fields(
    _logger: logging.Logger, _method_name: str, event_dict: EventDict
) -> EventDict:
    """Replace values of sensitive-looking keys with a fixed marker."""
    for key in list(event_dict):
        if key in _PROTECTED_KEYS:
            continue
        if any(marker in key.lower() for marker in _SENSITIVE_MARKERS):
            event_dict[key] = "***REDACTED***"
    return event_dict


def configure_logging(settings: Settings) -> None:
    """Configure stdlib logging level and structlog processors.

    Args:
        settings: Application settings (log_level, log_format).
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
    )
    # SQL echo is noisy at INFO
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        redact_sensitive_fields,
        structlog.processors.format_exc_info,
    ]
    if settings.log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
