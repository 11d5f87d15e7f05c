"""
Module: severity.py
Description: Severity levels and the threshold gate.

Severities are totally ordered (DEBUG < INFO < WARN < ERROR < FATAL) and
share numeric values with the standard library's logging levels so they
can be compared with, or handed to, code that speaks logging levels.
"""

from enum import IntEnum
from typing import Union


class Severity(IntEnum):
    """Ordered log severity."""

    DEBUG = 10
    INFO = 20
    WARN = 30
    ERROR = 40
    FATAL = 50

    @property
    def label(self) -> str:
        """Upper-case name used as the line prefix."""
        return self.name


_ALIASES = {
    "WARNING": Severity.WARN,
    "CRITICAL": Severity.FATAL,
}

SeverityLike = Union[Severity, str, int]


def parse_severity(value: SeverityLike) -> Severity:
    """
    Coerce a severity name, number, or Severity into a Severity.

    Names are case-insensitive; WARNING and CRITICAL are accepted as
    aliases of WARN and FATAL.

    Args:
        value: Severity, severity name, or numeric level

    Returns:
        Matching Severity

    Raises:
        ValueError: If the value does not name a known severity
    """
    if isinstance(value, Severity):
        return value

    if isinstance(value, str):
        name = value.strip().upper()
        if name in Severity.__members__:
            return Severity[name]
        if name in _ALIASES:
            return _ALIASES[name]
        valid = ", ".join(Severity.__members__)
        raise ValueError(f"severity must be one of: {valid} (got {value!r})")

    if isinstance(value, int) and not isinstance(value, bool):
        try:
            return Severity(value)
        except ValueError:
            raise ValueError(f"unknown severity level: {value}") from None

    raise ValueError(f"severity must be a Severity, name, or level (got {type(value).__name__})")


def should_emit(call_severity: Severity, configured_min: Severity) -> bool:
    """Return True when a call at call_severity passes the configured threshold."""
    return call_severity >= configured_min
