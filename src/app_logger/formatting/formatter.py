"""
Module: formatter.py
Description: Classification of log call arguments into a FormattedRecord.

A leading string argument is the human message; every other argument is
data. One data argument becomes the structured payload as-is, several
become a list in call order.

Key Components:
- split_arguments(): separate the message from the data arguments
- format_arguments(): build the FormattedRecord for a log call

The functions here are pure and keep no state, so they are safe to call
from any number of threads.
"""

from typing import Any, List, Optional, Sequence, Tuple

from app_logger.formatting.pretty import render_pretty
from app_logger.formatting.serialize import to_structured
from app_logger.models.record import FormattedRecord


def split_arguments(args: Sequence[Any]) -> Tuple[Optional[str], List[Any]]:
    """
    Separate the human message from the data arguments.

    Args:
        args: Positional arguments of a log call

    Returns:
        Tuple of (message or None, data arguments in original order)
    """
    if not args:
        return None, []
    if isinstance(args[0], str):
        return args[0], list(args[1:])
    return None, list(args)


def format_arguments(args: Sequence[Any], pretty: bool = False) -> FormattedRecord:
    """
    Build the formatted record for a log call.

    Args:
        args: Positional arguments of a log call
        pretty: Also build the pretty rendering of the data arguments

    Returns:
        FormattedRecord with message, structured payload and pretty text

    Raises:
        SerializationError: If a data argument has no JSON-compatible form

    Example:
        >>> format_arguments(["Processing order", {"id": "1234"}]).structured
        {'id': '1234'}
    """
    message, data_args = split_arguments(args)

    values = [to_structured(value) for value in data_args]
    if not values:
        structured = None
    elif len(values) == 1:
        structured = values[0]
    else:
        structured = values

    pretty_text = render_pretty(data_args) if pretty and data_args else None

    return FormattedRecord(
        message=message,
        structured=structured,
        pretty_text=pretty_text,
        data_count=len(values)
    )
