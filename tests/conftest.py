"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from typing import Any

import pytest


@pytest.fixture
def sample_document() -> dict[str, Any]:
    """Nested document covering every wire type."""
    return {
        "null": None,
        "bool": True,
        "string": "Hello, world!",
        "int": 123,
        "negative": -200,
        "float": 123.456,
        "array": [1, 2, 3],
        "object": {"a": 1, "b": 2, "c": 3},
    }


@pytest.fixture
def scenario_document() -> dict[str, Any]:
    """The small mixed document used in end-to-end checks."""
    return {"a": 1, "b": [True, None, "x"]}
