"""Split a model response into visible prose and the raw citation block."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Optional

_OPENING_FENCE = re.compile(r"^```(?:json)?[ \t]*", re.IGNORECASE)
_CLOSING_FENCE = re.compile(r"\s*```$")


@dataclass(frozen=True)
class SplitResponse:
    """Visible prose plus the text found after the start delimiter, if any."""

    visible_text: str
    raw_block: Optional[str] = None


def contains_delimiter(response: Any, start_delimiter: str) -> bool:
    """True when ``response`` is a string holding the start delimiter."""
    return isinstance(response, str) and start_delimiter in response


def split_response(response: str, start_delimiter: str, end_delimiter: str) -> SplitResponse:
    """Separate visible text from the citation block.

    The first occurrence of ``start_delimiter`` wins.  A missing end delimiter
    is tolerated: the block then runs to the end of the response.
    """
    start = response.find(start_delimiter)
    if start == -1:
        return SplitResponse(visible_text=response.strip())

    block_start = start + len(start_delimiter)
    end = response.find(end_delimiter, block_start)
    raw_block = response[block_start:end] if end != -1 else response[block_start:]

    return SplitResponse(visible_text=response[:start].strip(), raw_block=raw_block)


def strip_code_fences(block: str) -> str:
    """Remove a surrounding ```json ... ``` wrapper.

    Only strips when both the opening and the closing fence are present; a
    lone fence is left in place for the JSON decoder to reject.
    """
    stripped = block.strip()
    opening = _OPENING_FENCE.match(stripped)
    if opening is None:
        return stripped

    inner = stripped[opening.end():]
    closing = _CLOSING_FENCE.search(inner)
    if closing is None:
        return stripped

    return inner[: closing.start()].strip()
