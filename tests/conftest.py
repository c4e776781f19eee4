"""Pytest configuration and shared fixtures."""

from typing import Any

import pytest
import tiktoken

from json2toon.stats import DEFAULT_ENCODING


@pytest.fixture
def simple_data() -> list[dict[str, Any]]:
    """Simple test data with basic fields."""
    return [
        {"id": 1, "name": "Alice", "role": "admin"},
        {"id": 2, "name": "Bob", "role": "user"},
        {"id": 3, "name": "Charlie", "role": "user"},
    ]


@pytest.fixture
def users_document() -> dict[str, Any]:
    """Two-user document with a known exact encoding."""
    return {
        "users": [
            {"id": 1, "name": "Alice", "role": "admin"},
            {"id": 2, "name": "Bob", "role": "user"},
        ]
    }


@pytest.fixture
def users_toon() -> str:
    """Encoding of `users_document` with default options."""
    return "users[2]{id,name,role}:\n  1,Alice,admin\n  2,Bob,user"


@pytest.fixture
def nested_data() -> list[dict[str, Any]]:
    """Same-shaped objects holding nested objects (not tabular)."""
    return [
        {"id": 1, "user": {"name": "Alice", "email": "alice@example.com"}},
        {"id": 2, "user": {"name": "Bob", "email": "bob@example.com"}},
    ]


@pytest.fixture
def data_with_quoting() -> list[dict[str, Any]]:
    """Rows whose cells need quoting."""
    return [
        {"id": 1, "note": "a,b", "quote": 'say "hi"'},
        {"id": 2, "note": "", "quote": "123"},
        {"id": 3, "note": " padded ", "quote": "true"},
    ]


@pytest.fixture(scope="session")
def tiktoken_encoding() -> str:
    """Name of a loadable tiktoken encoding; skips when it cannot be fetched."""
    try:
        tiktoken.get_encoding(DEFAULT_ENCODING)
    except Exception as e:  # encoding files are downloaded on first use
        pytest.skip(f"tiktoken encoding {DEFAULT_ENCODING} unavailable: {e}")
    return DEFAULT_ENCODING
