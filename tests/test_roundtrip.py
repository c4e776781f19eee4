"""Encode-then-decode tests over representative documents."""

from __future__ import annotations

from typing import Any

import pytest

from json2toon import decode, encode
from json2toon.encoder import EncodeOptions


class TestFixtureRoundTrips:
    """Shared fixtures survive a round trip."""

    def test_tabular(self, simple_data: list[dict[str, Any]]) -> None:
        assert decode(encode(simple_data)) == simple_data

    def test_quoting(self, data_with_quoting: list[dict[str, Any]]) -> None:
        document = {"rows": data_with_quoting}
        assert decode(encode(document)) == document

    def test_nested_objects_in_array(self, nested_data: list[dict[str, Any]]) -> None:
        document = {"rows": nested_data}
        assert decode(encode(document)) == document


@pytest.mark.parametrize(
    "document",
    [
        {},
        [],
        "hello",
        "a: b",
        "",
        42,
        None,
        {"mixed": [1, "string", True, None]},
        {"m": [[1, 2], [{"a": 3}], []]},
        {"text": "a\nb", "rows": [{"s": "x\ny"}, {"s": "z"}]},
        ["k: v", "n[1]:", "- x", "[0][1]:"],
        {"a": {"b": {"c": [{"d": 1}, {"d": 2}]}}},
        {"x": 1.5, "y": -2e-05, "z": 1e100, "n": -7},
        {"名前": "太郎", "x-y": [{"a-b": 1}]},
        {"xs": [{"a": {"b": 1}, "c": 2}, {"a": {"b": 3}, "c": 4}]},
        {"xs": [{"tags": ["a"], "id": 1}, {"tags": ["b"], "id": 2}]},
        {"codes": ["007", "+5", ".5", "1e5"], "flags": ["true", "null"]},
    ],
)
def test_document_round_trip(document: Any) -> None:
    assert decode(encode(document)) == document


def test_round_trip_with_wide_indent() -> None:
    document = {"a": {"b": [{"c": 1, "d": "x"}]}, "e": [[1], ["y"]]}
    text = encode(document, EncodeOptions(indent_width=4))
    assert isinstance(text, str)
    assert decode(text) == document
