"""TOON Protocol.

TOON (Token-Oriented Object Notation) carries the JSON data model in fewer
tokens, for text-based language models:

Core features:
    - Indentation instead of braces for nesting.
    - Tabular rows: arrays of same-shaped flat objects become a header
      naming the columns plus one comma-separated row per object.
    - Statistics: estimated token savings against the JSON form.
"""

from __future__ import annotations

from typing import Any, cast

from json2toon.decoder import decode
from json2toon.encoder import ConversionResult, EncodeOptions, encode, encode_json
from json2toon.stats import DEFAULT_ENCODING, count_tokens, estimate_tokens


class TOON:
    """Encoder/decoder entry points for the TOON format.

    Example:
        >>> TOON.encode({"users": [{"id": 1, "name": "Alice"}]})
        'users[1]{id,name}:\\n  1,Alice'
    """

    @staticmethod
    def encode(data: Any, *, indent_width: int = 2, sort_keys: bool = False) -> str:
        """Encode data to TOON.

        Args:
            data: Any JSON-equivalent Python value.
            indent_width: Spaces per nesting level.
            sort_keys: Render keys in ascending order.

        Returns:
            The TOON text.
        """
        return cast("str", encode(data, EncodeOptions(indent_width, sort_keys)))

    @staticmethod
    def encode_with_stats(
        data: Any, *, indent_width: int = 2, sort_keys: bool = False
    ) -> ConversionResult:
        """Encode data and compare it against its pretty-printed JSON form."""
        options = EncodeOptions(indent_width, sort_keys, include_stats=True)
        return cast("ConversionResult", encode(data, options))

    @staticmethod
    def encode_json(
        json_text: str | bytes, *, indent_width: int = 2, sort_keys: bool = False
    ) -> ConversionResult:
        """Encode a JSON document, measuring savings against that document."""
        options = EncodeOptions(indent_width, sort_keys, include_stats=True)
        return cast("ConversionResult", encode_json(json_text, options))

    @staticmethod
    def decode(payload: str) -> Any:
        """Decode a TOON payload.

        Raises:
            MalformedInput: If an array header line is malformed.
        """
        return decode(payload)

    @staticmethod
    def hint() -> str:
        """Short description of the format for LLM prompts.

        Returns:
            A short hint string.
        """
        return (
            "Data is in TOON: indentation nests objects, `key: value` per field, "
            "`name[N]{a,b}:` starts N comma-separated rows with columns a,b, "
            "`name[N]:` starts N indented items. Quoted values use \"\" for a quote."
        )

    @staticmethod
    def estimate_tokens(text: str) -> int:
        """Estimate tokens with the fixed characters-per-token heuristic."""
        return estimate_tokens(text)

    @staticmethod
    def count_tokens(text: str, *, encoding: str = DEFAULT_ENCODING) -> int:
        """Count tokens in text using the specified encoding."""
        return count_tokens(text, encoding=encoding)
