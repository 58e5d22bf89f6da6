"""Deferred citation parsing: splitting, JSON repair, shape and field normalization."""

from __future__ import annotations

from deferred_citations.parsing.json_repair import RepairReport, decode_citation_block, repair_json
from deferred_citations.parsing.markers import get_citation_marker_ids, replace_deferred_markers
from deferred_citations.parsing.normalize import (
    PageLocator,
    deferred_citation_to_citation,
    generate_citation_key,
    normalize_citations,
    parse_page_id,
)
from deferred_citations.parsing.parser import (
    DeferredCitationParser,
    extract_visible_text,
    get_all_citations_from_deferred_response,
    has_deferred_citations,
    parse_deferred_citation_response,
)
from deferred_citations.parsing.shapes import detect_shape, expand_compact_keys, normalize_block
from deferred_citations.parsing.splitter import SplitResponse, split_response, strip_code_fences

__all__ = [
    "DeferredCitationParser",
    "PageLocator",
    "RepairReport",
    "SplitResponse",
    "decode_citation_block",
    "deferred_citation_to_citation",
    "detect_shape",
    "expand_compact_keys",
    "extract_visible_text",
    "generate_citation_key",
    "get_all_citations_from_deferred_response",
    "get_citation_marker_ids",
    "has_deferred_citations",
    "normalize_block",
    "normalize_citations",
    "parse_deferred_citation_response",
    "parse_page_id",
    "repair_json",
    "replace_deferred_markers",
    "split_response",
    "strip_code_fences",
]
