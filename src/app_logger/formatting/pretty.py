"""
Module: pretty.py
Description: Human-oriented rendering of data arguments.

Purely cosmetic: the output is meant for people reading a terminal or a
local file and is never parsed back. Maps are shown one key per line with
the keys aligned, sequences with index markers.

Example:
    >>> print(render_pretty([{"id": "10102001", "total": "1295"}]))
    dict
        id    => "10102001"
        total => "1295"
"""

import json
from typing import Any, List, Sequence

from app_logger.formatting.serialize import to_structured

INDENT = 4


def _scalar(value: Any) -> str:
    if isinstance(value, dict):
        return "{}"
    if isinstance(value, list):
        return "[]"
    return json.dumps(value, ensure_ascii=False)


def _is_nested(value: Any) -> bool:
    return isinstance(value, (dict, list)) and len(value) > 0


def _lines(value: Any, indent: int) -> List[str]:
    pad = " " * indent

    if isinstance(value, dict) and value:
        width = max(len(key) for key in value)
        lines = []
        for key, item in value.items():
            label = f"{pad}{key.ljust(width)} =>"
            if _is_nested(item):
                lines.append(label)
                lines.extend(_lines(item, indent + INDENT))
            else:
                lines.append(f"{label} {_scalar(item)}")
        return lines

    if isinstance(value, list) and value:
        width = len(str(len(value) - 1))
        lines = []
        for index, item in enumerate(value):
            label = f"{pad}[{str(index).rjust(width)}]"
            if _is_nested(item):
                lines.append(label)
                lines.extend(_lines(item, indent + INDENT))
            else:
                lines.append(f"{label} {_scalar(item)}")
        return lines

    return [f"{pad}{_scalar(value)}"]


def render_pretty(data_args: Sequence[Any]) -> str:
    """
    Render each data argument as its type name followed by its contents.

    Args:
        data_args: Raw data arguments, in call order

    Returns:
        Multi-line text block (no trailing newline)
    """
    lines: List[str] = []
    for value in data_args:
        lines.append(type(value).__name__)
        lines.extend(_lines(to_structured(value), INDENT))
    return "\n".join(lines)
