"""
Module: conftest.py
Description: Shared pytest fixtures for app logger tests.

Provides output streams, sample log data, an in-memory ingestion client
for deterministic remote sink tests, and moto-backed CloudWatch Logs
for the boto3 adapter.
"""

import io
from typing import List, Optional

import boto3
import pytest
from moto import mock_aws

from app_logger.errors import DestinationError, StaleTokenError, TransportError
from app_logger.models.destination import DestinationHandle
from app_logger.registry import close_default_logger
from app_logger.sinks.base import IngestionClient

TEST_MESSAGE = '¡Sierra! 🌟 🐭 🌱 🦄 SUCCESS'


class FakeIngestionClient(IngestionClient):
    """
    In-memory ingestion client.

    Tokens are "t1", "t2", ... in append order. Failures are scripted by
    queuing exceptions in ``append_failures``; a queued None lets that
    append through.
    """

    def __init__(self):
        self.destinations = []
        self.appends = []
        self.append_tokens = []
        self.append_failures: List[Optional[Exception]] = []
        self.token_reads = 0
        self.ensure_error: Optional[Exception] = None
        self.token_error: Optional[Exception] = None
        self.current = None
        self.closed = False

    def ensure_destination(self, log_group_name, log_stream_name):
        if self.ensure_error is not None:
            raise self.ensure_error
        self.destinations.append((log_group_name, log_stream_name))
        return DestinationHandle(
            log_group_name=log_group_name,
            log_stream_name=log_stream_name,
            sequence_token=self.current
        )

    def append(self, handle, events, token=None):
        self.append_tokens.append(token)
        if self.append_failures:
            failure = self.append_failures.pop(0)
            if failure is not None:
                raise failure
        if token != self.current:
            raise StaleTokenError("stale", destination=handle.log_group_name)
        self.appends.append(list(events))
        self.current = f"t{len(self.appends)}"
        return self.current

    def current_token(self, handle):
        self.token_reads += 1
        if self.token_error is not None:
            raise self.token_error
        return self.current

    def close(self):
        self.closed = True


@pytest.fixture
def output():
    """Provide an in-memory text stream to log into."""
    return io.StringIO()


@pytest.fixture
def test_message():
    return TEST_MESSAGE


@pytest.fixture
def sample_order():
    """
    Provide order data used as a data argument.

    Mirrors the kind of record applications pass alongside a message.
    """
    return {"id": "10102001", "total": "1295", "subtotal": "..."}


@pytest.fixture
def fake_client():
    """Provide an in-memory ingestion client."""
    return FakeIngestionClient()


@pytest.fixture
def aws_credentials(monkeypatch):
    """Point boto3 at fake credentials so nothing reaches AWS."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")


@pytest.fixture
def mock_logs(aws_credentials):
    """
    Provide a moto-backed CloudWatch Logs boto3 client.

    The mock stays active for the whole test so clients created inside
    the code under test are mocked too.
    """
    with mock_aws():
        yield boto3.client('logs', region_name='us-east-1')


@pytest.fixture(autouse=True)
def reset_default_logger():
    """Leave no process-wide default logger behind between tests."""
    yield
    close_default_logger()


@pytest.fixture
def destination_error():
    return DestinationError("AccessDeniedException", destination="orders")


@pytest.fixture
def transport_error():
    return TransportError("ServiceUnavailableException", destination="orders")
