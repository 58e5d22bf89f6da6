"""deferred-citations: recover citation records from LLM responses that defer
their citation data to a JSON block after the prose.

Typical use::

    from deferred_citations import (
        parse_deferred_citation_response,
        deferred_citation_to_citation,
        replace_deferred_markers,
    )

    result = parse_deferred_citation_response(llm_output)
    citations = [deferred_citation_to_citation(record) for record in result.citations]
    plain = replace_deferred_markers(result.visible_text)
"""

from __future__ import annotations

from deferred_citations.core.config import AppSettings, ObservabilityConfig, ParserSettings
from deferred_citations.exceptions import CitationBlockError, DeferredCitationError
from deferred_citations.hooks import setup_logging
from deferred_citations.models import (
    BlockShape,
    Citation,
    CitationData,
    ParseResult,
    TimestampData,
    Timestamps,
)
from deferred_citations.parsing import (
    DeferredCitationParser,
    deferred_citation_to_citation,
    extract_visible_text,
    generate_citation_key,
    get_all_citations_from_deferred_response,
    get_citation_marker_ids,
    has_deferred_citations,
    parse_deferred_citation_response,
    replace_deferred_markers,
)

__all__ = [
    "AppSettings",
    "BlockShape",
    "Citation",
    "CitationBlockError",
    "CitationData",
    "DeferredCitationError",
    "DeferredCitationParser",
    "ObservabilityConfig",
    "ParseResult",
    "ParserSettings",
    "TimestampData",
    "Timestamps",
    "deferred_citation_to_citation",
    "extract_visible_text",
    "generate_citation_key",
    "get_all_citations_from_deferred_response",
    "get_citation_marker_ids",
    "has_deferred_citations",
    "parse_deferred_citation_response",
    "replace_deferred_markers",
    "setup_logging",
]
