"""TOON - Token-Oriented Object Notation.

A compact, indentation-based rendering of JSON data for LLM prompts.
"""

from json2toon.core import TOON
from json2toon.decoder import decode, decode_value
from json2toon.encoder import ConversionResult, EncodeOptions, encode, encode_json, encode_lines
from json2toon.errors import InvalidSourceValue, MalformedInput, ToonError
from json2toon.stats import (
    ConversionStats,
    compute_stats,
    count_tokens,
    estimate_tokens,
    format_stats,
)
from json2toon.values import UNDEFINED

__all__ = [
    "TOON",
    "UNDEFINED",
    "ConversionResult",
    "ConversionStats",
    "EncodeOptions",
    "InvalidSourceValue",
    "MalformedInput",
    "ToonError",
    "compute_stats",
    "count_tokens",
    "decode",
    "decode_value",
    "encode",
    "encode_json",
    "encode_lines",
    "estimate_tokens",
    "format_stats",
]
__version__ = "0.1.0"
