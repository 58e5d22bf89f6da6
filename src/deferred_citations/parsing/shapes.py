"""Normalize the three citation block layouts into one flat record list.

A decoded block is one of:

* a flat array of records, ``[{...}, {...}]``;
* an object grouping records by attachment id, ``{"abc123": [{...}]}``;
* a single record object, ``{...}``.

Independently of the layout, each record may use compact keys (``n``, ``f``,
``p`` ...) in place of the canonical names.  Everything downstream only ever
sees canonical ``CitationData`` records.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Optional

from deferred_citations.models import BlockShape, CitationData

log = logging.getLogger(__name__)

COMPACT_KEY_MAP: dict[str, str] = {
    "n": "id",
    "a": "attachment_id",
    "r": "reasoning",
    "f": "full_phrase",
    "k": "anchor_text",
    "p": "page_id",
    "l": "line_ids",
    "t": "timestamps",
}

TIMESTAMP_KEY_MAP: dict[str, str] = {
    "s": "start_time",
    "e": "end_time",
}


def detect_shape(parsed: Any) -> BlockShape:
    """Classify a decoded block by structure alone."""
    if isinstance(parsed, list):
        return BlockShape.FLAT if parsed else BlockShape.EMPTY
    if isinstance(parsed, dict):
        if not parsed:
            return BlockShape.EMPTY
        if all(isinstance(value, list) for value in parsed.values()):
            return BlockShape.GROUPED
        return BlockShape.SINGLE
    return BlockShape.UNRECOGNIZED


def _expand_keys(raw: Mapping[str, Any], key_map: Mapping[str, str]) -> dict[str, Any]:
    # Compact keys first so a canonical key for the same field overwrites them.
    expanded = {key_map[key]: value for key, value in raw.items() if key in key_map}
    expanded.update((key, value) for key, value in raw.items() if key not in key_map)
    return expanded


def expand_compact_keys(record: Mapping[str, Any], attachment_id: Optional[str] = None) -> dict[str, Any]:
    """Rewrite compact keys to canonical names.

    Args:
        record: Raw record, possibly mixing compact and canonical keys.
        attachment_id: Group key to inject; overrides any id in the record.
    """
    expanded = _expand_keys(record, COMPACT_KEY_MAP)

    timestamps = expanded.get("timestamps")
    if isinstance(timestamps, Mapping):
        expanded["timestamps"] = _expand_keys(timestamps, TIMESTAMP_KEY_MAP)

    if attachment_id is not None:
        expanded["attachment_id"] = attachment_id

    return expanded


def to_citation_data(record: Mapping[str, Any], attachment_id: Optional[str] = None) -> CitationData:
    """Build a canonical ``CitationData`` from a raw record."""
    return CitationData.model_validate(expand_compact_keys(record, attachment_id))


def _records_from(items: list[Any], attachment_id: Optional[str] = None) -> list[CitationData]:
    records: list[CitationData] = []
    for item in items:
        if not isinstance(item, Mapping):
            log.debug("Skipping non-object citation entry: %r", item)
            continue
        records.append(to_citation_data(item, attachment_id))
    return records


def normalize_block(parsed: Any) -> tuple[BlockShape, list[CitationData]]:
    """Flatten a decoded citation block into an ordered record list.

    Grouped blocks are concatenated in key order, each group's order kept.
    Group keys are used verbatim as attachment ids, so ``"0"`` stays ``"0"``.
    """
    shape = detect_shape(parsed)

    if shape is BlockShape.FLAT:
        return shape, _records_from(parsed)

    if shape is BlockShape.GROUPED:
        records: list[CitationData] = []
        for attachment_id, group in parsed.items():
            records.extend(_records_from(group, str(attachment_id)))
        return shape, records

    if shape is BlockShape.SINGLE:
        return shape, [to_citation_data(parsed)]

    if shape is BlockShape.UNRECOGNIZED:
        log.debug("Citation block is neither an array nor an object: %r", parsed)
    return shape, []
