"""
Module: base.py
Description: Sink and ingestion client interfaces.

Key Components:
- Sink: delivers a formatted record somewhere (a stream, a remote service)
- IngestionClient: boundary to a remote append-only log service

Implementations:
- StreamSink: writes rendered text to a file-like object
- RemoteSink: appends events through an IngestionClient
- CloudWatchLogsClient: IngestionClient backed by CloudWatch Logs
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from app_logger.models.destination import DestinationHandle
from app_logger.models.record import FormattedRecord, LogEvent
from app_logger.models.severity import Severity


class Sink(ABC):
    """Destination of formatted records."""

    @abstractmethod
    def emit(
        self,
        record: FormattedRecord,
        severity: Severity,
        progname: Optional[str] = None
    ) -> None:
        """
        Deliver one record.

        Args:
            record: Formatted record of the log call
            severity: Severity of the log call
            progname: Logger context passed to custom formatters
        """
        ...

    def close(self) -> None:
        """Release resources held by the sink."""


class IngestionClient(ABC):
    """Port to a remote log ingestion service."""

    @abstractmethod
    def ensure_destination(self, log_group_name: str, log_stream_name: str) -> DestinationHandle:
        """
        Create the destination if needed and return a handle to it.

        Idempotent: calling it for an existing destination finds it.

        Raises:
            DestinationError: On permission or network failure
        """
        ...

    @abstractmethod
    def append(
        self,
        handle: DestinationHandle,
        events: Sequence[LogEvent],
        token: Optional[str] = None
    ) -> Optional[str]:
        """
        Append events, in order, and return the next continuation token.

        Raises:
            StaleTokenError: If token is not the current one
            TransportError: On any other failure
        """
        ...

    @abstractmethod
    def current_token(self, handle: DestinationHandle) -> Optional[str]:
        """
        Read the continuation token the service currently expects.

        Raises:
            TransportError: If the token cannot be read
        """
        ...

    def close(self) -> None:
        """Release the underlying connection."""
