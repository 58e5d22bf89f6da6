"""Deferred citation parser: the "split & parse" entry points.

A deferred-citation response carries ``[N]`` markers in its prose and a JSON
data block after a delimiter::

    The company grew 45% [1].

    <<<CITATION_DATA>>>
    [{"id": 1, "attachment_id": "abc", "full_phrase": "grew 45%", "anchor_text": "45%"}]
    <<<END_CITATION_DATA>>>

Parsing never raises on model output.  Only a missing or empty response is
reported as a failure; an unusable data block is treated as absent.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from functools import lru_cache
from typing import Any, Optional

from deferred_citations.core.config import ParserSettings
from deferred_citations.exceptions import CitationBlockError
from deferred_citations.models import Citation, CitationData, ParseResult
from deferred_citations.parsing.json_repair import decode_citation_block
from deferred_citations.parsing.normalize import normalize_citations
from deferred_citations.parsing.shapes import normalize_block
from deferred_citations.parsing.splitter import contains_delimiter, split_response, strip_code_fences

log = logging.getLogger(__name__)

INVALID_INPUT_ERROR = "Invalid input: expected a non-empty string"


def build_citation_map(citations: Iterable[CitationData]) -> dict[int, CitationData]:
    """Index records by id; the last record wins for a repeated id."""
    return {citation.id: citation for citation in citations if citation.id is not None}


class DeferredCitationParser:
    """Parses deferred-citation responses using a configured delimiter pair."""

    def __init__(
        self,
        settings: Optional[ParserSettings] = None,
        *,
        start_delimiter: Optional[str] = None,
        end_delimiter: Optional[str] = None,
    ) -> None:
        settings = settings or ParserSettings()
        overrides: dict[str, Any] = {}
        if start_delimiter is not None:
            overrides["start_delimiter"] = start_delimiter
        if end_delimiter is not None:
            overrides["end_delimiter"] = end_delimiter
        if overrides:
            settings = ParserSettings(**{**settings.model_dump(), **overrides})
        self.settings = settings

    def has_deferred_citations(self, response: Any) -> bool:
        return contains_delimiter(response, self.settings.start_delimiter)

    def parse(self, response: Any) -> ParseResult:
        """Split ``response`` into visible text and shape-normalized records."""
        if not isinstance(response, str) or not response:
            return ParseResult(success=False, error=INVALID_INPUT_ERROR)

        split = split_response(response, self.settings.start_delimiter, self.settings.end_delimiter)
        if split.raw_block is None:
            return ParseResult(success=True, visible_text=split.visible_text)

        block = strip_code_fences(split.raw_block)
        if not block:
            return ParseResult(success=True, visible_text=split.visible_text)

        try:
            parsed, report = decode_citation_block(
                block,
                close_brackets=self.settings.close_unclosed_brackets,
            )
        except CitationBlockError as exc:
            log.warning("Ignoring unparseable citation block: %s", exc)
            return ParseResult(success=True, visible_text=split.visible_text)

        if report.changed and self.settings.log_repairs:
            log.warning("JSON repair applied to citation block: %s", ", ".join(report.repairs))

        shape, citations = normalize_block(parsed)
        return ParseResult(
            success=True,
            visible_text=split.visible_text,
            citations=citations,
            citation_map=build_citation_map(citations),
            shape=shape,
            repairs=report.repairs,
        )

    def extract_visible_text(self, response: Any) -> str:
        return self.parse(response).visible_text

    def get_all_citations(self, response: Any) -> dict[str, Citation]:
        """Every usable citation in ``response``, keyed by citation key."""
        result = self.parse(response)
        if not result.success or not result.citations:
            return {}
        return normalize_citations(result.citations)


@lru_cache(maxsize=1)
def default_parser() -> DeferredCitationParser:
    """Parser built from environment settings, created on first use."""
    return DeferredCitationParser()


def parse_deferred_citation_response(response: Any) -> ParseResult:
    """Parse a model response carrying a deferred citation block.

    Example::

        >>> result = parse_deferred_citation_response(llm_output)
        >>> result.visible_text
        'The company grew 45% [1].'
        >>> result.citations[0].anchor_text
        '45%'
    """
    return default_parser().parse(response)


def get_all_citations_from_deferred_response(response: Any) -> dict[str, Citation]:
    """All citations with a full phrase, keyed by ``generate_citation_key``."""
    return default_parser().get_all_citations(response)


def has_deferred_citations(response: Any) -> bool:
    """True when ``response`` is a string containing the start delimiter."""
    return default_parser().has_deferred_citations(response)


def extract_visible_text(response: Any) -> str:
    """The prose portion of ``response`` without the citation block."""
    return default_parser().extract_visible_text(response)
