"""Pydantic data models for deferred-citations.

``CitationData`` is the raw record recovered from a citation block, with
compact keys already expanded to their canonical names.  ``Citation`` is the
display-ready record handed to rendering layers; it serializes with camelCase
aliases (``model_dump(by_alias=True)``).
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Annotated, Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    ValidatorFunctionWrapHandler,
    WrapValidator,
    model_validator,
)
from pydantic.alias_generators import to_camel

log = logging.getLogger(__name__)


def _lenient(value: Any, handler: ValidatorFunctionWrapHandler, info: ValidationInfo) -> Any:
    """Validate ``value``, degrading to ``None`` instead of failing the record."""
    try:
        return handler(value)
    except ValidationError:
        log.debug("Dropping malformed %s value: %r", info.field_name, value)
        return None


LenientInt = Annotated[Optional[int], WrapValidator(_lenient)]
LenientStr = Annotated[Optional[str], WrapValidator(_lenient)]
LenientIntList = Annotated[Optional[list[int]], WrapValidator(_lenient)]

# ── Block shape ──────────────────────────────────────────────────────


class BlockShape(str, Enum):
    """Structural layout of a decoded citation block."""

    FLAT = "flat"
    GROUPED = "grouped"
    SINGLE = "single"
    EMPTY = "empty"
    UNRECOGNIZED = "unrecognized"


# ── Raw records (canonical keys) ─────────────────────────────────────


class TimestampData(BaseModel):
    """Raw A/V timestamp pair as emitted by the model."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    start_time: LenientStr = None
    end_time: LenientStr = None


class CitationData(BaseModel):
    """One citation record from the block, keyed by canonical field names.

    Unknown keys are kept as extras.  A field whose value cannot be coerced to
    its type is set to ``None`` without affecting the rest of the record.
    """

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    id: LenientInt = None
    attachment_id: LenientStr = None
    reasoning: LenientStr = None
    full_phrase: LenientStr = None
    anchor_text: LenientStr = None
    page_id: LenientStr = None
    line_ids: LenientIntList = None
    timestamps: Annotated[Optional[TimestampData], WrapValidator(_lenient)] = None


# ── Display records ──────────────────────────────────────────────────


class Timestamps(BaseModel):
    """Start/end offsets of an audio or video citation."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    start_time: Optional[str] = None
    end_time: Optional[str] = None


class Citation(BaseModel):
    """A normalized, display-ready citation."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    attachment_id: Optional[str] = None
    reasoning: Optional[str] = None
    full_phrase: Optional[str] = None
    anchor_text: Optional[str] = None
    page_number: Optional[int] = None
    start_page_id: Optional[str] = None
    line_ids: Optional[list[int]] = None
    timestamps: Optional[Timestamps] = None
    citation_number: Optional[int] = None

    @model_validator(mode="after")
    def _page_fields_travel_together(self) -> Citation:
        if (self.page_number is None) != (self.start_page_id is None):
            raise ValueError("page_number and start_page_id must be set together")
        return self


# ── Parse result ─────────────────────────────────────────────────────


class ParseResult(BaseModel):
    """Outcome of splitting and parsing one model response."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool
    visible_text: str = ""
    citations: list[CitationData] = Field(default_factory=list)
    citation_map: dict[int, CitationData] = Field(default_factory=dict)
    error: Optional[str] = None
    shape: Optional[BlockShape] = None
    repairs: list[str] = Field(default_factory=list)
