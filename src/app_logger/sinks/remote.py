"""
Module: remote.py
Description: Sink appending log records to a remote destination.

Each emitted record becomes one timestamped LogEvent appended through an
IngestionClient. The destination (log group and log stream) is ensured
lazily on the first emission. The continuation token returned by every
append is kept in a RemoteStreamState and read-modify-written under its
lock, so concurrent callers on one sink never race for the token.

Failure handling:
- destination cannot be ensured: DestinationError, state becomes FAILED
- stale token: token refreshed, append retried once; if the retry fails
  for any reason, TransportError and state becomes FAILED
- other transport failure: TransportError, state unchanged
- once FAILED, every emit fails immediately until the sink is rebuilt

Dependencies: tenacity (via sinks.retry)
Author: App Logger Team
"""

from datetime import datetime, timezone
from typing import Callable, Optional, Sequence

from app_logger.errors import DestinationError, StaleTokenError, TransportError
from app_logger.models.destination import RemoteStreamState, StreamStatus
from app_logger.models.record import LogEvent
from app_logger.sinks.base import IngestionClient, Sink
from app_logger.sinks.retry import stale_token_retry
from app_logger.utils.logger import get_logger

logger = get_logger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RemoteSink(Sink):
    """
    Sink delivering (message, structured) pairs to a remote log stream.

    Attributes:
        log_group_name: Destination log group
        log_stream_name: Destination log stream
        client: IngestionClient performing the remote calls
        state: RemoteStreamState with the continuation token

    Example:
        >>> sink = RemoteSink("orders-service", "worker-1", CloudWatchLogsClient())
        >>> sink.emit(record, Severity.INFO)
    """

    def __init__(
        self,
        log_group_name: str,
        log_stream_name: str,
        client: IngestionClient,
        clock: Optional[Callable[[], datetime]] = None
    ):
        if not log_group_name or not isinstance(log_group_name, str):
            raise ValueError("log_group_name must be a non-empty string")
        if not log_stream_name or not isinstance(log_stream_name, str):
            raise ValueError("log_stream_name must be a non-empty string")
        if not isinstance(client, IngestionClient):
            raise ValueError("client must be an IngestionClient instance")

        self.log_group_name = log_group_name
        self.log_stream_name = log_stream_name
        self.client = client
        self.clock = clock or _utc_now
        self.state = RemoteStreamState(log_group_name, log_stream_name)
        self._refreshed = False

    @property
    def status(self) -> StreamStatus:
        return self.state.status

    @property
    def token(self) -> Optional[str]:
        return self.state.token

    def open(self) -> None:
        """Ensure the destination exists without appending anything."""
        with self.state.lock:
            self._ensure_ready()

    def emit(self, record, severity, progname=None) -> None:
        event = LogEvent(
            timestamp=int(self.clock().timestamp() * 1000),
            severity=severity,
            message=record.message,
            structured=record.structured,
            has_structured=record.has_structured
        )
        self.append([event])

    def append(self, events: Sequence[LogEvent]) -> None:
        """
        Append events in order, managing the continuation token.

        Args:
            events: Events to append

        Raises:
            DestinationError: If the destination cannot be ensured
            TransportError: If the append fails
        """
        with self.state.lock:
            self._ensure_ready()
            self._refreshed = False
            try:
                self._append_with_retry(events)
            except StaleTokenError as e:
                logger.error(
                    "Append failed after sequence token refresh",
                    log_group_name=self.log_group_name,
                    log_stream_name=self.log_stream_name,
                    error=str(e)
                )
                error = TransportError(
                    f"Append to {self.log_group_name} rejected after refreshing the sequence token",
                    destination=self.log_group_name
                )
                self.state.mark_failed(error)
                raise error from e
            except TransportError as e:
                # Only a failure after a refresh is fatal to the stream.
                if self._refreshed:
                    self.state.mark_failed(e)
                raise

    def _ensure_ready(self) -> None:
        state = self.state

        if state.status == StreamStatus.FAILED:
            raise TransportError(
                f"Destination {self.log_group_name} is unavailable after an earlier failure",
                destination=self.log_group_name
            ) from state.failure

        if state.status != StreamStatus.UNINITIALIZED:
            return

        try:
            handle = self.client.ensure_destination(self.log_group_name, self.log_stream_name)
        except DestinationError as e:
            state.mark_failed(e)
            raise

        state.handle = handle
        state.mark_ready(handle.sequence_token)

        logger.debug(
            "Remote destination ready",
            log_group_name=self.log_group_name,
            log_stream_name=self.log_stream_name
        )

    @stale_token_retry
    def _append_with_retry(self, events: Sequence[LogEvent]) -> None:
        state = self.state
        try:
            next_token = self.client.append(state.handle, events, state.token)
        except StaleTokenError as e:
            if not self._refreshed:
                self._refresh_token(e)
            raise

        state.mark_ready(next_token)

    def _refresh_token(self, stale: StaleTokenError) -> None:
        state = self.state
        state.status = StreamStatus.REFRESHING
        self._refreshed = True

        if stale.expected_token:
            state.mark_ready(stale.expected_token)
        else:
            try:
                state.mark_ready(self.client.current_token(state.handle))
            except TransportError as e:
                state.mark_failed(e)
                raise

        logger.info(
            "Sequence token refreshed",
            log_group_name=self.log_group_name,
            log_stream_name=self.log_stream_name
        )

    def close(self) -> None:
        self.client.close()
