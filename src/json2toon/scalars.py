"""Scalar value encoding and parsing for TOON.

Strings use SQL-style quoting: a quoted span is wrapped in double quotes and
every inner double quote is doubled. There is no backslash escaping.
"""

from __future__ import annotations

import math
import re

from json2toon.errors import InvalidSourceValue
from json2toon.values import Bool, Null, Number, Scalar, String, Undefined

# JSON number grammar; anything else stays a string.
NUMBER_PATTERN = re.compile(r"-?(?:0|[1-9]\d*)(?:\.\d+)?(?:[eE][+-]?\d+)?")

# Synthetic key for a top-level array.
ROOT_KEY = "root"

BARE_KEY_PATTERN = re.compile(r"\w+")

# A key is a bare word or a quoted span.
KEY = r'(?:\w+|"(?:[^"]|"")*")'

# Text that a line-oriented reader would take for a key line or array header.
_STRUCTURAL_PREFIX = re.compile(rf"(?:{KEY}|\[\d+\])(?:\[|:(?: |$))")

_LITERALS = {"null": Null(), "true": Bool(True), "false": Bool(False)}

_QUOTE_TRIGGERS = (",", '"', "\n", "\r")


def stringify(value: Scalar, *, standalone: bool = False) -> str:
    """Render a scalar as TOON text.

    Args:
        value: The scalar to render.
        standalone: True when the text will sit alone on a line, where a
            string that looks like a key line or array header must be quoted.

    Returns:
        The rendered token.
    """
    match value:
        case Null():
            return "null"
        case Bool(flag):
            return "true" if flag else "false"
        case Undefined():
            return "undefined"
        case Number(number):
            return format_number(number)
        case String(text):
            if needs_quotes(text) or (standalone and _STRUCTURAL_PREFIX.match(text)):
                return quote(text)
            return text


def format_number(number: int | float) -> str:
    if isinstance(number, float):
        if math.isnan(number) or math.isinf(number):
            raise InvalidSourceValue(f"Non-finite number has no JSON form: {number!r}")
        return repr(number)
    return str(number)


def needs_quotes(text: str) -> bool:
    """Check if a string must be quoted to survive `parse_scalar`.

    A string is quoted when it contains a comma, a double quote or a line
    break, when it is empty or has surrounding whitespace, or when it would
    otherwise read back as null, a boolean or a number.
    """
    if not text or text != text.strip():
        return True
    if any(char in text for char in _QUOTE_TRIGGERS):
        return True
    return text in _LITERALS or NUMBER_PATTERN.fullmatch(text) is not None


def quote(text: str) -> str:
    return '"' + text.replace('"', '""') + '"'


def unquote(token: str) -> str:
    """Strip one enclosing pair of quotes and collapse doubled quotes."""
    if len(token) >= 2 and token.startswith('"') and token.endswith('"'):
        return token[1:-1].replace('""', '"')
    return token


def parse_scalar(token: str) -> Scalar:
    """Parse an unquoted or quoted token.

    Order of preference: null, booleans, numbers, then strings. Quoted
    tokens are never literals or numbers. Empty tokens are empty strings.
    """
    token = token.strip()

    if (literal := _LITERALS.get(token)) is not None:
        return literal

    if NUMBER_PATTERN.fullmatch(token):
        number = _parse_number(token)
        if number is not None:
            return Number(number)

    return String(unquote(token))


def _parse_number(token: str) -> int | float | None:
    number = float(token)
    if math.isinf(number):
        # Out of double range; keep the text.
        return None
    if "." not in token and "e" not in token.lower():
        return int(token)
    return number


def format_key(key: str) -> str:
    """Render an object key, quoting it when it is not a bare word."""
    if "\n" in key or "\r" in key:
        raise InvalidSourceValue(f"Object keys cannot contain line breaks: {key!r}")
    if BARE_KEY_PATTERN.fullmatch(key):
        return key
    return quote(key)


def parse_key(token: str) -> str:
    return unquote(token.strip())


def open_quote(text: str) -> bool:
    """Whether `text` ends inside a quoted span."""
    return _scan(text, split=False)[1]


def split_cells(row: str) -> list[str]:
    """Split a row on commas outside quoted spans.

    Quotes are kept on the returned cells; `parse_scalar` removes them.
    """
    return _scan(row, split=True)[0]


def _scan(text: str, *, split: bool) -> tuple[list[str], bool]:
    # A quote opens a span only at the start of a cell; inside a span a
    # doubled quote is literal.
    cells = []
    current: list[str] = []
    in_quotes = False
    cell_start = True
    i = 0

    while i < len(text):
        char = text[i]
        if in_quotes:
            if char == '"':
                if text[i + 1 : i + 2] == '"':
                    current.append(char)
                    i += 1
                else:
                    in_quotes = False
        elif char == '"' and cell_start:
            in_quotes = True
        elif char == "," and split:
            cells.append("".join(current))
            current = []
            cell_start = True
            i += 1
            continue
        elif char == ",":
            cell_start = True
            current.append(char)
            i += 1
            continue

        if not char.isspace():
            cell_start = False
        current.append(char)
        i += 1

    cells.append("".join(current))
    return cells, in_quotes
