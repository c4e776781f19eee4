"""TOON decoder implementation.

The grammar is line-oriented and indentation-sensitive. Each structural line
is matched against these patterns, in order:

1. tabular array header   ``name[N]{col1,col2}:``
2. generic array header   ``name[N]:``
3. nested object header   ``name:``
4. key-value line         ``name: value``

Non-blank lines matching none of them are skipped, unless they start like an
array header, in which case `MalformedInput` is raised. A quoted span may
continue over several lines but must be closed before the input ends.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Literal

from json2toon.errors import MalformedInput
from json2toon.scalars import (
    KEY,
    ROOT_KEY,
    open_quote,
    parse_key,
    parse_scalar,
    split_cells,
)
from json2toon.values import Array, Object, Value, to_python

logger = logging.getLogger(__name__)

# Keys, or [i] positional labels for arrays nested in arrays.
_LABEL = rf"(?P<label>{KEY}|\[\d+\])"
_COLUMNS = r'(?P<columns>(?:[^{}"]|"(?:[^"]|"")*")*)'

TABULAR_HEADER = re.compile(rf"{_LABEL}\[(?P<count>\d+)\]\{{{_COLUMNS}\}}:")
GENERIC_HEADER = re.compile(rf"{_LABEL}\[(?P<count>\d+)\]:")
NESTED_HEADER = re.compile(rf"(?P<label>{KEY}):")
KEY_VALUE = re.compile(rf"(?P<label>{KEY}): (?P<value>.*)")

# Anything starting like an array header must be a valid one.
HEADER_PREFIX = re.compile(rf"(?:{KEY}|\[\d+\])\[")

EntryKind = Literal["tabular", "generic", "nested", "value"]

_PATTERNS: list[tuple[EntryKind, re.Pattern[str]]] = [
    ("tabular", TABULAR_HEADER),
    ("generic", GENERIC_HEADER),
    ("nested", NESTED_HEADER),
    ("value", KEY_VALUE),
]


def decode(text: str) -> Any:
    """Decode TOON text to plain Python data.

    Args:
        text: The TOON-formatted string.

    Returns:
        The decoded dict, list or scalar.

    Raises:
        MalformedInput: If an array header line is malformed or a quoted
            string is never closed.
    """
    return to_python(decode_value(text))


def decode_value(text: str) -> Value:
    """Decode TOON text to a Value tree."""
    cursor = _Cursor(text.split("\n"))

    first = cursor.peek()
    if first is None:
        return Object({})

    first_entry = _match_line(first)
    if first_entry is None and not HEADER_PREFIX.match(first.content):
        scalar = _decode_bare_scalar(cursor, first)
        if scalar is not None:
            return scalar

    root = _decode_object(cursor, 0)

    # A document holding only a `root` array header is a top-level array.
    if (
        first_entry is not None
        and first_entry.kind in ("tabular", "generic")
        and first_entry.label == ROOT_KEY
        and list(root.entries) == [ROOT_KEY]
    ):
        return root.entries[ROOT_KEY]
    return root


@dataclass(frozen=True)
class _Line:
    """A non-blank physical line."""

    number: int
    raw: str
    indent: int
    content: str


@dataclass(frozen=True)
class _Entry:
    """A line matched by one of the structural patterns."""

    kind: EntryKind
    label: str
    match: re.Match[str]

    @property
    def positional(self) -> bool:
        return self.label.startswith("[")

    @property
    def key(self) -> str:
        return parse_key(self.label)


class _Cursor:
    """Position within the input lines."""

    def __init__(self, lines: list[str]) -> None:
        self.lines = lines
        self.pos = 0

    def peek(self) -> _Line | None:
        """Return the next non-blank line without consuming it."""
        while self.pos < len(self.lines):
            raw = self.lines[self.pos]
            if raw.strip():
                stripped = raw.lstrip(" ")
                return _Line(
                    number=self.pos + 1,
                    raw=raw,
                    indent=len(raw) - len(stripped),
                    content=stripped.rstrip(),
                )
            self.pos += 1
        return None

    def advance(self) -> None:
        self.pos += 1

    def take_token(self, line: _Line, text: str) -> str:
        """Extend `text` with following raw lines while a quoted span is open.

        Raises:
            MalformedInput: If the input ends inside the span opened on `line`.
        """
        while open_quote(text):
            if self.pos >= len(self.lines):
                raise _malformed(line, "Unterminated quoted string")
            text += "\n" + self.lines[self.pos]
            self.pos += 1
        return text


def _match_line(line: _Line) -> _Entry | None:
    for kind, pattern in _PATTERNS:
        match = pattern.fullmatch(line.content)
        if match:
            return _Entry(kind, match.group("label"), match)
    return None


def _malformed(line: _Line, message: str) -> MalformedInput:
    return MalformedInput(message, line_number=line.number, line=line.content)


def _decode_bare_scalar(cursor: _Cursor, line: _Line) -> Value | None:
    """Decode a document made of a single unkeyed scalar, if it is one."""
    start = cursor.pos
    cursor.advance()
    token = cursor.take_token(line, line.raw[line.indent :])
    if cursor.peek() is None:
        return parse_scalar(token)
    cursor.pos = start
    return None


def _decode_object(cursor: _Cursor, indent: int, *, element: bool = False) -> Object:
    """Decode an object block whose lines are indented at least `indent`.

    With `element` set the block is one element of a generic array: it ends
    at a line of the same indentation that repeats a key already read or
    that is not a key line at all.
    """
    entries: dict[str, Value] = {}

    while True:
        line = cursor.peek()
        if line is None or line.indent < indent:
            break

        entry = _match_line(line)

        if element and line.indent == indent:
            if entry is None or entry.positional or entry.key in entries:
                break

        if entry is None:
            if HEADER_PREFIX.match(line.content):
                raise _malformed(line, "Malformed array header")
            logger.debug("Skipping unrecognized line %d: %r", line.number, line.content)
            cursor.advance()
            continue

        if entry.positional:
            raise _malformed(line, "Positional array header outside an array")

        entries[entry.key] = _decode_entry(cursor, line, entry)

    return Object(entries)


def _decode_entry(cursor: _Cursor, line: _Line, entry: _Entry) -> Value:
    """Decode the value introduced by a matched structural line."""
    cursor.advance()

    match entry.kind:
        case "tabular":
            columns = [parse_key(cell) for cell in split_cells(entry.match.group("columns"))]
            if columns == [""]:
                columns = []
            return _decode_rows(cursor, line, int(entry.match.group("count")), columns)
        case "generic":
            return _decode_elements(cursor, line, int(entry.match.group("count")))
        case "nested":
            child = cursor.peek()
            if child is not None and child.indent > line.indent:
                return _decode_object(cursor, child.indent)
            return Object({})
        case "value":
            start = line.indent + entry.match.start("value")
            return parse_scalar(cursor.take_token(line, line.raw[start:]))


def _decode_rows(cursor: _Cursor, header: _Line, count: int, columns: list[str]) -> Array:
    """Decode the rows of a tabular array."""
    rows: list[Value] = []

    while len(rows) < count:
        line = cursor.peek()
        if line is None or line.indent <= header.indent:
            break

        cursor.advance()
        cells = split_cells(cursor.take_token(line, line.raw[line.indent :]))
        if len(cells) != len(columns):
            logger.warning(
                "Line %d: expected %d cells, got %d", line.number, len(columns), len(cells)
            )

        rows.append(Object({column: parse_scalar(cell) for column, cell in zip(columns, cells)}))

    _check_count(header, count, len(rows))
    return Array(rows)


def _decode_elements(cursor: _Cursor, header: _Line, count: int) -> Array:
    """Decode the elements of a generic array."""
    items: list[Value] = []

    first = cursor.peek()
    if first is None or first.indent <= header.indent:
        _check_count(header, count, 0)
        return Array(items)
    indent = first.indent

    while len(items) < count:
        line = cursor.peek()
        if line is None or line.indent < indent:
            break

        entry = _match_line(line)
        if entry is None:
            if HEADER_PREFIX.match(line.content):
                raise _malformed(line, "Malformed array header")
            cursor.advance()
            items.append(parse_scalar(cursor.take_token(line, line.raw[line.indent :])))
        elif entry.positional:
            items.append(_decode_entry(cursor, line, entry))
        else:
            items.append(_decode_object(cursor, indent, element=True))

    _check_count(header, count, len(items))
    return Array(items)


def _check_count(header: _Line, declared: int, found: int) -> None:
    if found < declared:
        logger.warning(
            "Line %d: array declares %d elements, found %d", header.number, declared, found
        )
