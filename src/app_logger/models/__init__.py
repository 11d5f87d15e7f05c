"""
Package: models
Description: Severity levels, remote destination state and the records
passed between formatter, renderer and sinks.
"""

from app_logger.models.destination import DestinationHandle, RemoteStreamState, StreamStatus
from app_logger.models.record import FormattedRecord, LogEvent, LogResult
from app_logger.models.severity import Severity, parse_severity, should_emit

__all__ = [
    "DestinationHandle",
    "FormattedRecord",
    "LogEvent",
    "LogResult",
    "RemoteStreamState",
    "Severity",
    "StreamStatus",
    "parse_severity",
    "should_emit",
]
