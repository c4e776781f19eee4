"""Exceptions raised by the TOON encoder and decoder."""

from __future__ import annotations


class ToonError(Exception):
    """Base error for TOON encoding and decoding."""


class InvalidSourceValue(ToonError):
    """Raised when the encoder input is not a well-formed value tree."""


class MalformedInput(ToonError):
    """Raised when a structural line of TOON text violates the grammar."""

    def __init__(self, message: str, *, line_number: int, line: str) -> None:
        self.line_number = line_number
        self.line = line
        super().__init__(f"Line {line_number}: {message}: {line!r}")
