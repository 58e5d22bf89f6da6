"""Convert raw citation records into display-ready ``Citation`` objects."""

from __future__ import annotations

import hashlib
import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Optional, Union

from deferred_citations.models import Citation, CitationData, Timestamps
from deferred_citations.parsing.shapes import to_citation_data

log = logging.getLogger(__name__)

# Digit runs are capped; an oversized page or index is treated as unrecognized.
_SIMPLE_PAGE_ID = re.compile(r"^([0-9]{1,9})_([0-9]{1,9})$")
_LEGACY_PAGE_ID = re.compile(r"page[_a-zA-Z]*([0-9]{1,9})_index_([0-9]{1,9})(?![0-9])", re.IGNORECASE)


@dataclass(frozen=True)
class PageLocator:
    """Page number and on-page index decoded from a ``page_id``."""

    page_number: int
    index: int

    @property
    def start_page_id(self) -> str:
        return f"page_number_{self.page_number}_index_{self.index}"


def parse_page_id(page_id: Optional[str]) -> Optional[PageLocator]:
    """Decode ``"{P}_{I}"`` or ``"page_number_{P}_index_{I}"``.

    ``0_0`` is read as a zero-indexed first page and corrected to page 1.
    ``0_{I}`` with a non-zero index is ambiguous and left alone.  Anything
    unrecognized yields ``None``.
    """
    if not page_id:
        return None

    candidate = page_id.strip()
    match = _SIMPLE_PAGE_ID.match(candidate) or _LEGACY_PAGE_ID.search(candidate)
    if match is None:
        log.debug("Unrecognized page_id: %r", page_id)
        return None

    page_number, index = int(match.group(1)), int(match.group(2))
    if page_number == 0 and index == 0:
        page_number = 1

    return PageLocator(page_number=page_number, index=index)


def deferred_citation_to_citation(
    data: Union[CitationData, Mapping[str, Any]],
    citation_number: Optional[int] = None,
) -> Citation:
    """Convert a raw citation record to the standard ``Citation`` format.

    Args:
        data: A ``CitationData`` or a raw mapping (compact keys allowed).
        citation_number: Overrides the record's ``id`` as the citation number.
    """
    if not isinstance(data, CitationData):
        data = to_citation_data(data)

    locator = parse_page_id(data.page_id)

    timestamps = None
    if data.timestamps is not None:
        timestamps = Timestamps(
            start_time=data.timestamps.start_time,
            end_time=data.timestamps.end_time,
        )

    return Citation(
        attachment_id=data.attachment_id,
        reasoning=data.reasoning,
        full_phrase=data.full_phrase,
        anchor_text=data.anchor_text,
        page_number=locator.page_number if locator else None,
        start_page_id=locator.start_page_id if locator else None,
        line_ids=sorted(data.line_ids) if data.line_ids else None,
        timestamps=timestamps,
        citation_number=citation_number if citation_number is not None else data.id,
    )


def generate_citation_key(citation: Citation) -> str:
    """Deterministic 16-hex-char key identifying a citation's content."""
    timestamps = citation.timestamps or Timestamps()
    parts = [
        citation.attachment_id or "",
        str(citation.page_number) if citation.page_number else "",
        citation.full_phrase or "",
        citation.anchor_text or "",
        ",".join(str(line_id) for line_id in citation.line_ids or []),
        timestamps.start_time or "",
        timestamps.end_time or "",
    ]
    return hashlib.sha1("|".join(parts).encode("utf-8", "surrogatepass")).hexdigest()[:16]


def normalize_citations(records: Iterable[CitationData]) -> dict[str, Citation]:
    """Convert records to citations keyed by ``generate_citation_key``.

    Records without a non-empty ``full_phrase`` cannot be verified and are
    dropped.
    """
    citations: dict[str, Citation] = {}
    for record in records:
        citation = deferred_citation_to_citation(record)
        if not citation.full_phrase:
            log.debug("Skipping citation %s without full_phrase", record.id)
            continue
        citations[generate_citation_key(citation)] = citation
    return citations
