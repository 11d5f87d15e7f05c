"""
Module: serialize.py
Description: Conversion of log call data arguments to JSON-compatible values.

Data arguments are converted up front, before anything is rendered or
sent, so a value that has no JSON form fails the whole call with a
SerializationError instead of producing a partial log line.

Key Components:
- Serializable: capability protocol for objects that know their log form
- register_adapter(): plug in a converter for a third-party type
- to_structured(): recursive conversion with cycle detection

Supported out of the box: dict, list, tuple, set/frozenset, str, int,
float (finite), bool, None, pydantic models, dataclasses, datetime/date/
time (ISO 8601), Decimal and UUID (as strings), Enum (by value) and
filesystem paths.

Dependencies: pydantic, pydantic-core, functools, dataclasses
Author: App Logger Team
"""

import dataclasses
import math
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from functools import singledispatch
from pathlib import PurePath
from typing import Any, Callable, Protocol, runtime_checkable
from uuid import UUID

from pydantic import BaseModel
from pydantic_core import PydanticSerializationError

from app_logger.errors import SerializationError

_SCALARS = (str, int, float, bool, type(None))


@runtime_checkable
class Serializable(Protocol):
    """Objects that provide their own JSON-compatible log representation."""

    def to_log_data(self) -> Any:
        ...


@singledispatch
def _adapt(value: Any) -> Any:
    """Turn a non-native value into dicts, lists and scalars (one level)."""
    if isinstance(value, Serializable):
        return value.to_log_data()
    if isinstance(value, BaseModel):
        try:
            return value.model_dump(mode="json")
        except PydanticSerializationError as e:
            raise SerializationError(
                f"Cannot serialize model {type(value).__name__} for structured logging: {e}",
                value_type=type(value).__name__
            ) from e
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        # Shallow so cycles through dataclass fields are still detected.
        return {field.name: getattr(value, field.name) for field in dataclasses.fields(value)}

    raise SerializationError(
        f"Cannot serialize value of type {type(value).__name__} for structured logging",
        value_type=type(value).__name__
    )


@_adapt.register(datetime)
@_adapt.register(date)
@_adapt.register(time)
def _adapt_temporal(value) -> str:
    return value.isoformat()


@_adapt.register(Decimal)
@_adapt.register(UUID)
@_adapt.register(PurePath)
def _adapt_as_string(value) -> str:
    return str(value)


@_adapt.register(Enum)
def _adapt_enum(value: Enum) -> Any:
    return value.value


def register_adapter(cls: type, adapter: Callable[[Any], Any]) -> None:
    """
    Register a converter for values of type cls.

    The converter may return any value that is itself serializable:
    nested containers and other adapted types are converted in turn.

    Args:
        cls: Type whose instances the adapter handles
        adapter: Callable taking the value and returning its log form
    """
    _adapt.register(cls)(adapter)


def _convert_key(key: Any) -> str:
    """Stringify a mapping key the way JSON encoding would."""
    if isinstance(key, str):
        return key
    if isinstance(key, Enum):
        return _convert_key(key.value)
    if key is None:
        return "null"
    if isinstance(key, bool):
        return "true" if key else "false"
    if isinstance(key, int):
        return str(key)
    if isinstance(key, float):
        return repr(key)

    raise SerializationError(
        f"Cannot use key of type {type(key).__name__} in structured log data",
        value_type=type(key).__name__
    )


def _convert(value: Any, path: set) -> Any:
    if isinstance(value, str) or value is None or isinstance(value, bool):
        return value
    if isinstance(value, int) and not isinstance(value, Enum):
        return int(value)
    if isinstance(value, float) and not isinstance(value, Enum):
        if not math.isfinite(value):
            raise SerializationError(f"Cannot serialize non-finite float {value!r}", value_type="float")
        return float(value)

    marker = id(value)
    if marker in path:
        raise SerializationError(
            f"Cyclic reference detected while serializing {type(value).__name__}",
            value_type=type(value).__name__
        )

    path.add(marker)
    try:
        if isinstance(value, dict):
            return {_convert_key(k): _convert(v, path) for k, v in value.items()}
        if isinstance(value, (list, tuple)):
            return [_convert(item, path) for item in value]
        if isinstance(value, (set, frozenset)):
            items = [_convert(item, path) for item in value]
            try:
                return sorted(items)
            except TypeError:
                return items
        return _convert(_adapt(value), path)
    finally:
        path.discard(marker)


def to_structured(value: Any) -> Any:
    """
    Convert a data argument into a JSON-compatible value.

    Args:
        value: Any data argument passed to a log call

    Returns:
        Nested dicts (string keys), lists, str, int, float, bool or None

    Raises:
        SerializationError: If the value, or anything inside it, is cyclic
            or has no known JSON form
    """
    try:
        return _convert(value, set())
    except RecursionError as e:
        raise SerializationError(
            f"Value of type {type(value).__name__} is nested too deeply to serialize",
            value_type=type(value).__name__
        ) from e
