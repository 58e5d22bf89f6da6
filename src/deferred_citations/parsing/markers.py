"""Helpers for ``[N]`` citation markers in visible text."""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from typing import Any, Optional, Union

from deferred_citations.models import CitationData

# Ids are capped at 18 digits; longer bracketed runs are not markers.
MARKER_PATTERN = re.compile(r"\[([0-9]{1,18})\]")

CitationRecord = Union[CitationData, Mapping[str, Any]]


def get_citation_marker_ids(text: Any) -> list[int]:
    """Marker ids in order of appearance, repeats included."""
    if not isinstance(text, str):
        return []
    return [int(match.group(1)) for match in MARKER_PATTERN.finditer(text)]


def _anchor_text(record: Optional[CitationRecord]) -> str:
    if record is None:
        return ""
    if isinstance(record, Mapping):
        anchor = record.get("anchor_text")
    else:
        anchor = getattr(record, "anchor_text", None)
    return anchor if isinstance(anchor, str) else ""


def replace_deferred_markers(
    text: Any,
    *,
    citation_map: Optional[Mapping[int, CitationRecord]] = None,
    show_anchor_text: bool = False,
    replacer: Optional[Callable[[int, Optional[CitationRecord]], str]] = None,
) -> str:
    """Replace every ``[N]`` marker in ``text``.

    A ``replacer`` takes precedence over everything else; it receives the id
    and the record looked up in ``citation_map`` (``None`` when absent).
    Otherwise, with a ``citation_map`` and ``show_anchor_text``, the marker
    becomes the cited anchor text.  By default markers are removed.  Ids
    missing from the map are replaced with an empty string.

    Map values may be ``CitationData`` or plain dicts with canonical keys.

    Example::

        >>> replace_deferred_markers("Revenue grew 45% [1].")
        'Revenue grew 45% .'
    """
    if not isinstance(text, str):
        return ""

    def _substitute(match: re.Match[str]) -> str:
        marker_id = int(match.group(1))
        record = citation_map.get(marker_id) if citation_map is not None else None
        if replacer is not None:
            return replacer(marker_id, record)
        if show_anchor_text:
            return _anchor_text(record)
        return ""

    return MARKER_PATTERN.sub(_substitute, text)
