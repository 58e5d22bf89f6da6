"""Citation parsing skill: lets an agent split its own deferred-citation output."""

from __future__ import annotations

import json
from typing import Any

from strands import tool

from deferred_citations.parsing.markers import get_citation_marker_ids
from deferred_citations.parsing.normalize import deferred_citation_to_citation
from deferred_citations.parsing.parser import parse_deferred_citation_response


@tool
def parse_citation_response(content: str) -> str:
    """Split an LLM response into visible text and normalized citations.

    Args:
        content: Full response text, including the citation data block.

    Returns:
        JSON object with ``success``, ``visibleText``, ``markerIds`` and
        ``citations`` (camelCase citation records).
    """
    return json.dumps(citation_payload(content))


def citation_payload(content: str) -> dict[str, Any]:
    """Build the ``parse_citation_response`` payload.

    This is the pure-logic function, usable without the Strands @tool wrapper.
    """
    result = parse_deferred_citation_response(content)
    payload: dict[str, Any] = {
        "success": result.success,
        "visibleText": result.visible_text,
        "markerIds": get_citation_marker_ids(result.visible_text),
        "citations": [
            deferred_citation_to_citation(record).model_dump(by_alias=True, exclude_none=True)
            for record in result.citations
        ],
    }
    if result.error:
        payload["error"] = result.error
    return payload
