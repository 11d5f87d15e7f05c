"""
Module: errors.py
Description: Exception taxonomy for the app logger.

Every error raised by the library derives from AppLoggerError so callers
can catch the whole family at once, or a single failure mode when they
want to fall back (for example, from a remote destination to a local
stream).

Key Components:
- SerializationError: a data argument has no JSON-compatible form
- LogIOError: writing to a local stream failed
- DestinationError: the remote log group/stream could not be prepared
- TransportError: a remote append failed
- StaleTokenError: a remote append used an outdated sequence token

Author: App Logger Team
"""

from typing import Optional


class AppLoggerError(Exception):
    """Base class for all app logger errors."""


class SerializationError(AppLoggerError, TypeError):
    """Raised when a data argument cannot be converted to structured form."""

    def __init__(self, message: str, value_type: Optional[str] = None):
        super().__init__(message)
        self.value_type = value_type


class LogIOError(AppLoggerError, IOError):
    """Raised when the rendered block could not be written to the stream."""


class DestinationError(AppLoggerError):
    """Raised when a remote destination cannot be created or found."""

    def __init__(self, message: str, destination: Optional[str] = None):
        super().__init__(message)
        self.destination = destination


class TransportError(AppLoggerError):
    """Raised when a remote append fails and will not be retried."""

    def __init__(self, message: str, destination: Optional[str] = None):
        super().__init__(message)
        self.destination = destination


class StaleTokenError(TransportError):
    """
    Raised when the service rejects the sequence token of an append.

    Attributes:
        expected_token: Token the service reported as current, if any
    """

    def __init__(
        self,
        message: str,
        destination: Optional[str] = None,
        expected_token: Optional[str] = None
    ):
        super().__init__(message, destination=destination)
        self.expected_token = expected_token
