"""
app_logger: structured logging for humans and log indexers.

Log calls take an optional message followed by any number of data
arguments. The message is written as text; the data arguments are written
as one line of JSON, to a stream or to a CloudWatch Logs log group.
"""

from app_logger.cloudwatch.client import CloudWatchLogsClient
from app_logger.config.settings import LoggerConfig, LoggerSettings, get_settings
from app_logger.errors import (
    AppLoggerError,
    DestinationError,
    LogIOError,
    SerializationError,
    StaleTokenError,
    TransportError,
)
from app_logger.formatting.formatter import format_arguments
from app_logger.formatting.serialize import Serializable, register_adapter
from app_logger.logger import Logger
from app_logger.models.record import FormattedRecord, LogResult
from app_logger.models.severity import Severity
from app_logger.registry import close_default_logger, default_logger, has_default_logger, init_default_logger

__version__ = "0.3.0"

__all__ = [
    "AppLoggerError",
    "CloudWatchLogsClient",
    "DestinationError",
    "FormattedRecord",
    "LogIOError",
    "LogResult",
    "Logger",
    "LoggerConfig",
    "LoggerSettings",
    "SerializationError",
    "Serializable",
    "Severity",
    "StaleTokenError",
    "TransportError",
    "close_default_logger",
    "default_logger",
    "format_arguments",
    "get_settings",
    "has_default_logger",
    "init_default_logger",
    "register_adapter",
]
