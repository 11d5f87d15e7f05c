"""
Module: record.py
Description: Data models produced and consumed by the logger.

Key Components:
- FormattedRecord: output of the record formatter
- LogEvent: one timestamped entry handed to a remote destination
- LogResult: value returned from every leveled log call

Dependencies: pydantic, typing
Author: App Logger Team
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from app_logger.models.severity import Severity


class FormattedRecord(BaseModel):
    """
    Human message and structured payload derived from log call arguments.

    Attributes:
        message: Leading text argument, absent when the call had none
        structured: Single JSON value for one data argument, a list for
            several, absent when there were none
        pretty_text: Human-oriented rendering of the data arguments, only
            present when pretty printing is enabled
        data_count: Number of data arguments that were classified
    """

    model_config = ConfigDict(frozen=True)

    message: Optional[str] = Field(default=None, description="Human-readable message")
    structured: Optional[Any] = Field(default=None, description="JSON-compatible payload")
    pretty_text: Optional[str] = Field(default=None, description="Pretty rendering of data")
    data_count: int = Field(default=0, ge=0, description="Number of data arguments")

    @property
    def has_structured(self) -> bool:
        """True when at least one data argument was given."""
        # A single data argument may itself serialize to None.
        return self.data_count > 0


class LogEvent(BaseModel):
    """A single entry appended to a remote destination."""

    model_config = ConfigDict(frozen=True)

    timestamp: int = Field(..., ge=0, description="Milliseconds since the epoch (UTC)")
    severity: Severity
    message: Optional[str] = None
    structured: Optional[Any] = None
    has_structured: bool = False


class LogResult(BaseModel):
    """
    Outcome of a leveled log call.

    Truthy when the call was emitted, falsy when the severity gate
    suppressed it, so ``logger.debug(...) and logger.info(...)`` reads
    naturally.
    """

    model_config = ConfigDict(frozen=True)

    severity: Severity
    emitted: bool
    record: Optional[FormattedRecord] = None

    def __bool__(self) -> bool:
        return self.emitted
