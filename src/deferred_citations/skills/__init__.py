"""Agent skills: citation response parsing."""

from __future__ import annotations

from deferred_citations.skills.citations import citation_payload, parse_citation_response

__all__ = ["citation_payload", "parse_citation_response"]
