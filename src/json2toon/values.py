"""Value model shared by the encoder and decoder.

A Value is one of six closed variants mirroring JSON, plus the encoder-only
``Undefined`` marker kept for legacy output. Plain Python data is converted
with `from_python` and back with `to_python`.
"""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass, field
from typing import Any, TypeAlias

from json2toon.errors import InvalidSourceValue


@dataclass(frozen=True, slots=True)
class Null:
    pass


@dataclass(frozen=True, slots=True)
class Bool:
    value: bool


@dataclass(frozen=True, slots=True)
class Number:
    value: int | float


@dataclass(frozen=True, slots=True)
class String:
    value: str


@dataclass(frozen=True, slots=True)
class Undefined:
    """Legacy marker rendered as the literal ``undefined``.

    It has no JSON equivalent: the encoder accepts it, the decoder never
    produces it, and JSON rendering drops it the way ``JSON.stringify`` does.
    """


@dataclass(frozen=True, slots=True)
class Object:
    """Ordered mapping of unique string keys to values."""

    entries: dict[str, Value] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class Array:
    items: list[Value] = field(default_factory=list)


Scalar: TypeAlias = Null | Bool | Number | String | Undefined
Value: TypeAlias = Scalar | Object | Array

UNDEFINED = Undefined()

# Integer range JSON serializers write exactly; wider ints become floats.
INT_MIN = -(2**63)
UINT_MAX = 2**64 - 1


def from_python(data: Any) -> Value:
    """Convert plain Python data into a Value tree.

    Accepts None, bool, int, float, str, dict (str keys), list, tuple and the
    `UNDEFINED` marker. Existing Value instances are passed through.

    Raises:
        InvalidSourceValue: On cycles, unsupported types, non-string keys,
            non-finite floats or integers beyond double range.
    """
    return _convert(data, set())


def _convert(data: Any, active: set[int]) -> Value:
    if isinstance(data, (Null, Bool, Number, String, Undefined, Object, Array)):
        return data
    if data is None:
        return Null()
    if isinstance(data, bool):
        return Bool(data)
    if isinstance(data, int):
        if abs(data) > sys.float_info.max:
            raise InvalidSourceValue(f"Integer too large for a JSON number: {data}")
        return Number(data)
    if isinstance(data, float):
        if math.isnan(data) or math.isinf(data):
            raise InvalidSourceValue(f"Non-finite number has no JSON form: {data!r}")
        return Number(data)
    if isinstance(data, str):
        return String(data)

    if isinstance(data, (dict, list, tuple)):
        marker = id(data)
        if marker in active:
            raise InvalidSourceValue(f"Cyclic reference to {type(data).__name__}")
        active.add(marker)
        try:
            if isinstance(data, dict):
                entries: dict[str, Value] = {}
                for key, item in data.items():
                    if not isinstance(key, str):
                        raise InvalidSourceValue(
                            f"Object keys must be strings, got {type(key).__name__}: {key!r}"
                        )
                    entries[key] = _convert(item, active)
                return Object(entries)
            return Array([_convert(item, active) for item in data])
        finally:
            active.discard(marker)

    raise InvalidSourceValue(f"Cannot encode value of type {type(data).__name__}")


def to_python(value: Value) -> Any:
    """Convert a Value tree back into plain Python data."""
    match value:
        case Null():
            return None
        case Bool(flag):
            return flag
        case Number(number):
            return number
        case String(text):
            return text
        case Undefined():
            return UNDEFINED
        case Object(entries):
            return {key: to_python(item) for key, item in entries.items()}
        case Array(items):
            return [to_python(item) for item in items]


def to_json_data(value: Value) -> Any:
    """Like `to_python`, but drops undefined the way JSON serializers do.

    Undefined object entries are omitted and undefined array items become
    null. A bare undefined becomes null. Integers outside the 64-bit range
    become floats.
    """
    match value:
        case Undefined() | Null():
            return None
        case Bool(flag):
            return flag
        case Number(number) if isinstance(number, int) and not INT_MIN <= number <= UINT_MAX:
            return float(number)
        case Number(number):
            return number
        case String(text):
            return text
        case Object(entries):
            return {
                key: to_json_data(item)
                for key, item in entries.items()
                if not isinstance(item, Undefined)
            }
        case Array(items):
            return [to_json_data(item) for item in items]
