"""
Module: test_remote_sink.py
Description: Unit tests for the remote sink and its token state machine.

Uses the in-memory FakeIngestionClient from conftest to script stale
tokens, transport failures and destination failures deterministically.
"""

import threading
from datetime import datetime, timezone

import pytest

from app_logger.errors import DestinationError, StaleTokenError, TransportError
from app_logger.formatting.formatter import format_arguments
from app_logger.models.destination import StreamStatus
from app_logger.models.severity import Severity
from app_logger.sinks.remote import RemoteSink


@pytest.fixture
def sink(fake_client):
    """Provide a RemoteSink writing through the fake client."""
    return RemoteSink("aws-app-logger-test", "test-stream", fake_client)


def emit(sink, *args, severity=Severity.DEBUG):
    sink.emit(format_arguments(args), severity)


class TestRemoteSinkLifecycle:
    """Test cases for destination setup and event contents."""

    def test_invalid_arguments(self, fake_client):
        """Test RemoteSink validates its arguments."""
        with pytest.raises(ValueError, match="log_group_name must be a non-empty string"):
            RemoteSink("", "stream", fake_client)
        with pytest.raises(ValueError, match="log_stream_name must be a non-empty string"):
            RemoteSink("group", "", fake_client)
        with pytest.raises(ValueError, match="client must be an IngestionClient"):
            RemoteSink("group", "stream", object())

    def test_destination_ensured_lazily(self, sink, fake_client):
        """Test nothing is created until the first emission."""
        assert sink.status == StreamStatus.UNINITIALIZED
        assert fake_client.destinations == []

        emit(sink, "hello")

        assert fake_client.destinations == [("aws-app-logger-test", "test-stream")]
        assert sink.status == StreamStatus.READY

    def test_destination_ensured_once(self, sink, fake_client):
        """Test the destination is not re-ensured for later emissions."""
        emit(sink, "one")
        emit(sink, "two")

        assert len(fake_client.destinations) == 1

    def test_open_ensures_destination(self, sink, fake_client):
        """Test open() prepares the destination without appending."""
        sink.open()

        assert sink.status == StreamStatus.READY
        assert fake_client.appends == []

    def test_event_contents(self, fake_client, sample_order):
        """Test the event carries message, payload and a millisecond timestamp."""
        moment = datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)
        sink = RemoteSink("orders", "worker-1", fake_client, clock=lambda: moment)

        sink.emit(format_arguments(["Order completed", sample_order]), Severity.INFO)

        [event] = fake_client.appends[0]
        assert event.timestamp == int(moment.timestamp() * 1000)
        assert event.severity == Severity.INFO
        assert event.message == "Order completed"
        assert event.structured == sample_order
        assert event.has_structured is True

    def test_close_closes_client(self, sink, fake_client):
        """Test close() releases the client."""
        sink.close()
        assert fake_client.closed is True


class TestRemoteSinkTokens:
    """Test cases for continuation token handling."""

    def test_token_threaded_through_appends(self, sink, fake_client):
        """Test each append uses the token returned by the previous one."""
        emit(sink, "1")
        emit(sink, "2")
        emit(sink, "3")

        assert fake_client.append_tokens == [None, "t1", "t2"]
        assert sink.token == "t3"

    def test_initial_token_from_destination(self, fake_client):
        """Test the first append uses the token of an existing stream."""
        fake_client.current = "existing"
        sink = RemoteSink("orders", "worker-1", fake_client)

        emit(sink, "hello")

        assert fake_client.append_tokens == ["existing"]

    def test_stale_token_refreshed_and_retried_once(self, sink, fake_client):
        """Test a stale token is re-read and the append retried."""
        emit(sink, "1")
        fake_client.current = "from-another-writer"

        emit(sink, "2")

        assert fake_client.append_tokens == [None, "t1", "from-another-writer"]
        assert fake_client.token_reads == 1
        assert len(fake_client.appends) == 2
        assert sink.status == StreamStatus.READY

    def test_expected_token_used_without_reread(self, sink, fake_client):
        """Test a token reported by the service is used directly."""
        fake_client.current = "t0"
        fake_client.append_failures = [
            StaleTokenError("stale", destination="aws-app-logger-test", expected_token="t0")
        ]

        emit(sink, "hello")

        assert fake_client.append_tokens == ["t0", "t0"]
        assert fake_client.token_reads == 0
        assert sink.token == "t1"

    def test_second_stale_token_escalates(self, sink, fake_client):
        """Test a stale token on the retry fails with TransportError."""
        fake_client.append_failures = [
            StaleTokenError("stale", destination="aws-app-logger-test"),
            StaleTokenError("stale", destination="aws-app-logger-test"),
        ]

        with pytest.raises(TransportError) as exc_info:
            emit(sink, "hello")

        assert not isinstance(exc_info.value, StaleTokenError)
        assert isinstance(exc_info.value.__cause__, StaleTokenError)
        assert len(fake_client.append_tokens) == 2
        assert fake_client.token_reads == 1
        assert sink.status == StreamStatus.FAILED

    def test_transport_error_on_retry_escalates(self, sink, fake_client, transport_error):
        """Test any failure of the retried append moves the stream to FAILED."""
        fake_client.append_failures = [
            StaleTokenError("stale", destination="aws-app-logger-test"),
            transport_error,
        ]

        with pytest.raises(TransportError) as exc_info:
            emit(sink, "hello")

        assert exc_info.value is transport_error
        assert sink.status == StreamStatus.FAILED

        with pytest.raises(TransportError, match="unavailable after an earlier failure"):
            emit(sink, "again")

        assert len(fake_client.append_tokens) == 2

    def test_no_refresh_after_final_attempt(self, sink, fake_client, transport_error):
        """Test the token is re-read only when another attempt follows."""
        fake_client.current = "t0"
        fake_client.append_failures = [
            StaleTokenError("stale", destination="aws-app-logger-test", expected_token="t0"),
            StaleTokenError("stale", destination="aws-app-logger-test"),
        ]
        fake_client.token_error = transport_error

        with pytest.raises(TransportError, match="rejected after refreshing the sequence token"):
            emit(sink, "hello")

        assert fake_client.token_reads == 0
        assert sink.status == StreamStatus.FAILED

    def test_failed_destination_fails_fast(self, sink, fake_client):
        """Test calls after FAILED raise without reaching the client."""
        fake_client.append_failures = [
            StaleTokenError("stale", destination="aws-app-logger-test"),
            StaleTokenError("stale", destination="aws-app-logger-test"),
        ]
        with pytest.raises(TransportError):
            emit(sink, "hello")

        with pytest.raises(TransportError, match="unavailable after an earlier failure"):
            emit(sink, "again")

        assert len(fake_client.append_tokens) == 2

    def test_token_refresh_failure(self, sink, fake_client, transport_error):
        """Test a failing token re-read moves the stream to FAILED."""
        fake_client.append_failures = [StaleTokenError("stale", destination="aws-app-logger-test")]
        fake_client.token_error = transport_error

        with pytest.raises(TransportError) as exc_info:
            emit(sink, "hello")

        assert exc_info.value is transport_error
        assert len(fake_client.append_tokens) == 1
        assert sink.status == StreamStatus.FAILED


class TestRemoteSinkFailures:
    """Test cases for errors that are not retried."""

    def test_transport_error_not_retried(self, sink, fake_client, transport_error):
        """Test transport errors propagate on the first attempt."""
        fake_client.append_failures = [transport_error]

        with pytest.raises(TransportError) as exc_info:
            emit(sink, "hello")

        assert exc_info.value is transport_error
        assert len(fake_client.append_tokens) == 1
        assert fake_client.token_reads == 0

    def test_transport_error_leaves_stream_usable(self, sink, fake_client, transport_error):
        """Test a plain transport failure does not poison the stream."""
        fake_client.append_failures = [transport_error]
        with pytest.raises(TransportError):
            emit(sink, "lost")

        emit(sink, "delivered")

        assert sink.status == StreamStatus.READY
        assert [events[0].message for events in fake_client.appends] == ["delivered"]

    def test_destination_error(self, sink, fake_client, destination_error):
        """Test a destination failure propagates and marks the stream FAILED."""
        fake_client.ensure_error = destination_error

        with pytest.raises(DestinationError):
            emit(sink, "hello")

        assert sink.status == StreamStatus.FAILED

        with pytest.raises(TransportError) as exc_info:
            emit(sink, "again")

        assert exc_info.value.__cause__ is destination_error
        assert fake_client.append_tokens == []


class TestRemoteSinkConcurrency:
    """Test cases for concurrent writers on one sink."""

    def test_concurrent_appends_serialized(self, sink, fake_client):
        """Test concurrent emissions never present a stale token."""
        errors = []

        def worker(n):
            try:
                for i in range(25):
                    emit(sink, f"worker {n}", {"i": i})
            except Exception as e:  # collected for the assertion below
                errors.append(e)

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        assert len(fake_client.appends) == 200
        assert fake_client.append_tokens == [None] + [f"t{i}" for i in range(1, 200)]
        assert fake_client.token_reads == 0
