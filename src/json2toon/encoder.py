"""TOON encoder implementation."""

from __future__ import annotations

from collections.abc import Generator
from dataclasses import dataclass
from typing import Any, cast

import orjson

from json2toon.classify import NonTabular, Tabular, classify
from json2toon.errors import InvalidSourceValue
from json2toon.scalars import ROOT_KEY, format_key, stringify
from json2toon.stats import ConversionStats, compute_stats
from json2toon.values import Array, Object, Scalar, Value, from_python, to_json_data


@dataclass(frozen=True)
class EncodeOptions:
    """Options for TOON encoding."""

    indent_width: int = 2
    """Number of spaces per nesting level."""

    sort_keys: bool = False
    """Render object keys and tabular columns in ascending order."""

    include_stats: bool = False
    """Also compute token and size statistics against the JSON form."""

    def __post_init__(self) -> None:
        if isinstance(self.indent_width, bool) or not isinstance(self.indent_width, int):
            raise ValueError(f"indent_width must be an integer, got {self.indent_width!r}")
        if self.indent_width < 1:
            raise ValueError(f"indent_width must be positive, got {self.indent_width}")


@dataclass(frozen=True)
class ConversionResult:
    """Encoded text with optional statistics."""

    text: str
    stats: ConversionStats | None = None


def encode(data: Any, options: EncodeOptions | None = None) -> str | ConversionResult:
    """Encode a value to TOON.

    Args:
        data: Plain Python data (dict, list, scalars) or a Value tree.
        options: Encoding options.

    Returns:
        The TOON text, or a `ConversionResult` when `include_stats` is set.

    Raises:
        InvalidSourceValue: If `data` is not a JSON-equivalent tree.
    """
    opts = options or EncodeOptions()
    value = from_python(data)
    text = "\n".join(encode_lines(value, opts))

    if opts.include_stats:
        return ConversionResult(text, compute_stats(render_json(value), text))
    return text


def encode_json(
    json_text: str | bytes, options: EncodeOptions | None = None
) -> str | ConversionResult:
    """Encode a JSON document to TOON.

    When statistics are requested the given JSON text itself is measured.

    Raises:
        InvalidSourceValue: If `json_text` is not valid JSON.
    """
    opts = options or EncodeOptions()
    try:
        data = orjson.loads(json_text)
    except orjson.JSONDecodeError as e:
        raise InvalidSourceValue(f"Invalid JSON: {e}") from e

    text = "\n".join(encode_lines(data, opts))

    if opts.include_stats:
        source = json_text.decode() if isinstance(json_text, bytes) else json_text
        return ConversionResult(text, compute_stats(source, text))
    return text


def encode_lines(data: Any, options: EncodeOptions | None = None) -> Generator[str, None, None]:
    """Encode a value to TOON, yielding one logical line at a time."""
    opts = options or EncodeOptions()
    value = from_python(data)

    match value:
        case Object(entries):
            lines = _object_lines(entries, opts, 0)
        case Array(items):
            lines = _array_lines(ROOT_KEY, items, opts, 0)
        case _:
            lines = iter([stringify(value, standalone=True)])

    for line in lines:
        yield line.rstrip(" ")


def render_json(value: Value) -> str:
    """Pretty-print a Value as JSON with two-space indentation."""
    try:
        return orjson.dumps(to_json_data(value), option=orjson.OPT_INDENT_2).decode()
    except orjson.JSONEncodeError as e:
        raise InvalidSourceValue(f"Cannot render as JSON: {e}") from e


def _object_lines(
    entries: dict[str, Value], opts: EncodeOptions, depth: int
) -> Generator[str, None, None]:
    """Encode an object's entries at the given depth."""
    indent = " " * (opts.indent_width * depth)
    keys = sorted(entries) if opts.sort_keys else list(entries)

    for key in keys:
        value = entries[key]
        encoded_key = format_key(key)

        match value:
            case Object(nested):
                yield f"{indent}{encoded_key}:"
                yield from _object_lines(nested, opts, depth + 1)
            case Array(items):
                yield from _array_lines(encoded_key, items, opts, depth)
            case _:
                yield f"{indent}{encoded_key}: {stringify(value)}"


def _array_lines(
    label: str, items: list[Value], opts: EncodeOptions, depth: int
) -> Generator[str, None, None]:
    """Encode an array under an already-encoded key or positional label."""
    indent = " " * (opts.indent_width * depth)
    child_indent = " " * (opts.indent_width * (depth + 1))

    if not items:
        yield f"{indent}{label}[0]{{}}:"
        return

    match classify(items, sort_keys=opts.sort_keys):
        case Tabular(columns):
            fields = ",".join(format_key(column) for column in columns)
            yield f"{indent}{label}[{len(items)}]{{{fields}}}:"
            for item in items:
                row = cast("Object", item).entries
                cells = (stringify(cast("Scalar", row[column])) for column in columns)
                yield child_indent + ",".join(cells)
        case NonTabular():
            yield f"{indent}{label}[{len(items)}]:"
            for index, item in enumerate(items):
                match item:
                    case Object(entries):
                        yield from _object_lines(entries, opts, depth + 1)
                    case Array(nested):
                        yield from _array_lines(f"[{index}]", nested, opts, depth + 1)
                    case _:
                        yield child_indent + stringify(item, standalone=True)
