"""
Module: logger.py
Description: Diagnostics logging for the app logger library itself.

The library reports what it does to remote destinations (log group
created, sequence token refreshed, append rejected) through structlog.
These diagnostics are separate from the records applications write
through app_logger.Logger: by default they are handed to the standard
library logging tree, never to a Logger's output stream.

Key Components:
- configure_logging(): structlog setup (JSON or console rendering)
- owns_configuration(): whether the host application configured structlog
- get_logger(): named structlog logger

Dependencies: structlog
Author: App Logger Team
"""

import logging
from datetime import datetime, timezone
from typing import Optional, TextIO

import structlog


def _add_timestamp(logger, method_name, event_dict):
    """
    Add ISO 8601 timestamp to diagnostic entries.

    Args:
        logger: Logger instance
        method_name: Log method name (info, error, etc.)
        event_dict: Current log event dictionary

    Returns:
        Updated event dictionary with timestamp
    """
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def configure_logging(
    log_level: str = "WARNING",
    json_format: bool = True,
    stream: Optional[TextIO] = None
) -> None:
    """
    Configure structlog for library diagnostics.

    Without a stream, rendered entries are handed to the standard library
    logger of the same name, so they reach whatever handlers the host
    application installed (standard error when it installed none).

    Args:
        log_level: Minimum diagnostics level (DEBUG, INFO, WARNING, ERROR)
        json_format: Render JSON lines when True, console lines otherwise
        stream: Write rendered entries directly to this stream instead
    """
    level = getattr(logging, log_level.upper(), logging.WARNING)

    processors = [
        _add_timestamp,
        structlog.processors.add_log_level,
        structlog.processors.format_exc_info,
    ]
    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=(
            structlog.WriteLoggerFactory(file=stream) if stream is not None
            else structlog.stdlib.LoggerFactory()
        ),
        cache_logger_on_first_use=False,
    )


def owns_configuration() -> bool:
    """
    Tell whether structlog is unconfigured or configured by this library.

    Returns:
        False once the host application has called structlog.configure()
    """
    if not structlog.is_configured():
        return True
    return _add_timestamp in structlog.get_config()["processors"]


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Get a diagnostics logger.

    Args:
        name: Logger name (typically __name__)

    Returns:
        structlog logger instance

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("Log group created", log_group_name="orders")
    """
    return structlog.get_logger(name)


# Quiet defaults unless the host application configured structlog itself
if not structlog.is_configured():
    configure_logging()
