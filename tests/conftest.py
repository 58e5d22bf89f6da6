"""Shared fixtures for deferred-citations tests."""

from __future__ import annotations

import json
from typing import Any, Callable, Optional

import pytest

from deferred_citations.core.config import (
    DEFAULT_END_DELIMITER,
    DEFAULT_START_DELIMITER,
    ParserSettings,
)
from deferred_citations.parsing.parser import DeferredCitationParser

START = DEFAULT_START_DELIMITER
END = DEFAULT_END_DELIMITER


@pytest.fixture
def parser() -> DeferredCitationParser:
    """Parser with the default delimiter pair and repair logging on."""
    return DeferredCitationParser(ParserSettings())


@pytest.fixture
def make_response() -> Callable[..., str]:
    """Build a deferred-citation response from prose and a block.

    ``block`` may be a JSON-serializable value or an already-rendered string.
    """

    def _make(visible: str, block: Any, *, end: Optional[str] = END) -> str:
        body = block if isinstance(block, str) else json.dumps(block, indent=2)
        tail = f"\n{end}" if end else ""
        return f"{visible}\n\n{START}\n{body}{tail}"

    return _make


@pytest.fixture
def revenue_citations() -> list[dict[str, Any]]:
    """Three full-key citations backing the revenue sentence."""
    return [
        {
            "id": 1,
            "attachment_id": "abc123",
            "reasoning": "states revenue",
            "full_phrase": "Revenue for the year reached $1B",
            "anchor_text": "$1B",
            "page_id": "2_0",
            "line_ids": [14, 12, 13],
        },
        {
            "id": 2,
            "attachment_id": "abc123",
            "reasoning": "states profit",
            "full_phrase": "Net profit was $100M",
            "anchor_text": "$100M",
            "page_id": "3_1",
            "line_ids": [4],
        },
        {
            "id": 3,
            "attachment_id": "def456",
            "full_phrase": "All figures refer to Q4",
            "anchor_text": "Q4",
            "page_id": "page_number_1_index_0",
        },
    ]
