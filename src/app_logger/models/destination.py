"""
Module: destination.py
Description: Remote destination handle and per-stream state.

Key Components:
- DestinationHandle: log group/stream pair returned by the ingestion client
- StreamStatus: lifecycle of a remote stream
- RemoteStreamState: sequence token bookkeeping guarded by a lock

State transitions:
    UNINITIALIZED -> READY (destination ensured, no token yet)
    READY -> READY (append succeeded, token replaced)
    READY -> REFRESHING (append saw a stale token) -> READY
    any -> FAILED (destination could not be ensured, or retried append failed)
"""

import threading
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class DestinationHandle(BaseModel):
    """Identifies a prepared log group and log stream."""

    model_config = ConfigDict(frozen=True)

    log_group_name: str = Field(..., min_length=1, max_length=512)
    log_stream_name: str = Field(..., min_length=1, max_length=512)
    sequence_token: Optional[str] = Field(
        default=None,
        description="Upload sequence token current when the handle was created"
    )


class StreamStatus(str, Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    REFRESHING = "refreshing"
    FAILED = "failed"


class RemoteStreamState:
    """
    Mutable state of one remote stream.

    All reads and writes of the token must happen while holding ``lock``:
    the service expects the exact current token on every append.

    Attributes:
        log_group_name: Destination log group
        log_stream_name: Destination log stream
        status: Current StreamStatus
        handle: DestinationHandle once the destination is ensured
        token: Continuation token for the next append
        failure: Error that moved the state to FAILED
    """

    def __init__(self, log_group_name: str, log_stream_name: str):
        self.log_group_name = log_group_name
        self.log_stream_name = log_stream_name
        self.status = StreamStatus.UNINITIALIZED
        self.handle: Optional[DestinationHandle] = None
        self.token: Optional[str] = None
        self.failure: Optional[Exception] = None
        self.lock = threading.Lock()

    def mark_ready(self, token: Optional[str]) -> None:
        self.token = token
        self.status = StreamStatus.READY

    def mark_failed(self, error: Exception) -> None:
        self.failure = error
        self.status = StreamStatus.FAILED

    def __repr__(self):
        return (
            f"RemoteStreamState(log_group_name='{self.log_group_name}', "
            f"log_stream_name='{self.log_stream_name}', status={self.status.value})"
        )
