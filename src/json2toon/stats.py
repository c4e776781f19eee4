"""Token and size statistics comparing JSON with its TOON encoding.

`estimate_tokens` is a fixed heuristic shared with other implementations of
the format, so its rounding must not change. `count_tokens` gives exact
counts for a real model encoding via tiktoken.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

import tiktoken

DEFAULT_ENCODING = "o200k_base"

# Price used for the cost line of the report.
COST_PER_1K_TOKENS = 0.003

_WHITESPACE = re.compile(r"\s+")
_STRUCTURAL_CHARS = re.compile(r"[{}\[\]:,]")


@dataclass(frozen=True)
class ConversionStats:
    """Estimated token counts and sizes of a JSON/TOON pair."""

    json_token_count: int
    toon_token_count: int
    tokens_saved: int
    percentage_saved: float
    json_size: int
    toon_size: int
    compression_ratio: float


def estimate_tokens(text: str) -> int:
    """Estimate the token count of `text`.

    Whitespace runs count as one character, every four characters count as
    one token, and structural characters add 0.3 tokens each (rounded up).
    Characters are counted in UTF-16 code units, so a character outside the
    Basic Multilingual Plane counts twice.
    """
    normalized = _WHITESPACE.sub(" ", text)
    structural = len(_STRUCTURAL_CHARS.findall(text))
    return math.ceil(_utf16_length(normalized) / 4) + math.ceil(structural * 0.3)


def _utf16_length(text: str) -> int:
    return len(text.encode("utf-16-le", "surrogatepass")) // 2


def compute_stats(json_text: str, toon_text: str) -> ConversionStats:
    """Compare a JSON text with its TOON encoding.

    Sizes are UTF-8 byte lengths. An empty JSON side yields 0% saved and a
    ratio of 0.
    """
    json_tokens = estimate_tokens(json_text)
    toon_tokens = estimate_tokens(toon_text)
    saved = json_tokens - toon_tokens

    json_size = len(json_text.encode())
    toon_size = len(toon_text.encode())

    percentage = saved / json_tokens * 100 if json_tokens else 0.0
    ratio = toon_size / json_size if json_size else 0.0

    return ConversionStats(
        json_token_count=json_tokens,
        toon_token_count=toon_tokens,
        tokens_saved=saved,
        percentage_saved=_round_half_up(percentage, 2),
        json_size=json_size,
        toon_size=toon_size,
        compression_ratio=_round_half_up(ratio, 3),
    )


def _round_half_up(value: float, places: int) -> float:
    scale = 10**places
    return math.floor(value * scale + 0.5) / scale


def format_stats(stats: ConversionStats) -> str:
    """Render statistics as a human-readable report."""
    rule = "━" * 40
    cost = stats.tokens_saved / 1000 * COST_PER_1K_TOKENS
    return "\n".join(
        [
            "Conversion Statistics:",
            rule,
            "Token Count:",
            f"   JSON:  Estimated {stats.json_token_count} tokens",
            f"   TOON:  Estimated {stats.toon_token_count} tokens",
            f"   Saved: {stats.tokens_saved} tokens ({stats.percentage_saved}%)",
            "",
            "File Size:",
            f"   JSON:  {stats.json_size} bytes",
            f"   TOON:  {stats.toon_size} bytes",
            f"   Ratio: {stats.compression_ratio}x",
            "",
            "Cost Savings (estimated):",
            f"   At ${COST_PER_1K_TOKENS}/1K tokens: ${cost:.6f} per request",
            rule,
        ]
    )


def count_tokens(text: str, *, encoding: str = DEFAULT_ENCODING) -> int:
    """Count tokens in text using a tiktoken encoding."""
    return len(tiktoken.get_encoding(encoding).encode(text, disallowed_special=()))
