"""
Module: renderer.py
Description: Line rendering of formatted records for stream output.

The default block is:

    {SEVERITY}: {message}
    {compact JSON of the structured payload}
    {pretty rendering}

The JSON line is only written when there were data arguments; the pretty
rendering only when it was built. When the payload is a single map the
message is merged into it under "message" (never overwriting an existing
key) so a JSON line found by grep still carries its message. Arrays and
scalars are left untouched. No timestamp is written: the destination
stamps entries itself.

Key Components:
- Renderer: strategy interface
- DefaultRenderer: block format above
- OverrideRenderer: adapts a caller-supplied formatter callable
- render_block(): shared by the remote sink for event bodies
"""

import json
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from app_logger.models.record import FormattedRecord, LogEvent
from app_logger.models.severity import Severity

# (severity label, time, progname, message) -> text
FormatterOverride = Callable[[str, datetime, Optional[str], Optional[str]], str]


def to_json_line(value: Any) -> str:
    """Serialize a structured payload as one compact JSON line."""
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"), allow_nan=False)


def merge_message(structured: Any, message: Optional[str]) -> Any:
    """Add message to a map payload unless it already has a message key."""
    if message is None or not isinstance(structured, dict) or "message" in structured:
        return structured
    merged = dict(structured)
    merged["message"] = message
    return merged


def render_block(
    severity: Severity,
    message: Optional[str],
    structured: Any = None,
    has_structured: bool = False,
    pretty_text: Optional[str] = None
) -> str:
    """
    Render the severity line, the JSON line and the pretty text.

    Args:
        severity: Severity of the call
        message: Human message, or None
        structured: Structured payload
        has_structured: Whether a payload was given (it may itself be None)
        pretty_text: Pretty rendering, or None

    Returns:
        Text block without a trailing newline
    """
    if message is not None:
        lines = [f"{severity.label}: {message}"]
    else:
        lines = [f"{severity.label}:"]

    if has_structured:
        lines.append(to_json_line(merge_message(structured, message)))

    if pretty_text:
        lines.append(pretty_text)

    return "\n".join(lines)


def render_event(event: LogEvent) -> str:
    """Render a remote event body (no pretty text)."""
    return render_block(
        event.severity,
        event.message,
        event.structured,
        event.has_structured
    )


class Renderer(ABC):
    """Strategy turning a formatted record into the text written to a stream."""

    @abstractmethod
    def render(
        self,
        record: FormattedRecord,
        severity: Severity,
        progname: Optional[str] = None
    ) -> str:
        ...


class DefaultRenderer(Renderer):
    """Severity line, JSON line and pretty text."""

    def render(self, record, severity, progname=None) -> str:
        return render_block(
            severity,
            record.message,
            record.structured,
            record.has_structured,
            record.pretty_text
        )


class OverrideRenderer(Renderer):
    """
    Renders through a caller-supplied formatter.

    The formatter receives the severity label, the current time, the
    logger's progname and the message only; the structured payload and
    the pretty text are not passed on.
    """

    def __init__(self, formatter: FormatterOverride, clock: Callable[[], datetime] = None):
        if not callable(formatter):
            raise ValueError("formatter must be callable")
        self.formatter = formatter
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def render(self, record, severity, progname=None) -> str:
        return str(self.formatter(severity.label, self.clock(), progname, record.message))


def build_renderer(formatter: Optional[FormatterOverride] = None) -> Renderer:
    """Select the rendering strategy for an optional formatter override."""
    if formatter is None:
        return DefaultRenderer()
    return OverrideRenderer(formatter)
