"""Core configuration for deferred-citations."""

from __future__ import annotations

from deferred_citations.core.config import (
    DEFAULT_END_DELIMITER,
    DEFAULT_START_DELIMITER,
    AppSettings,
    ObservabilityConfig,
    ParserSettings,
)

__all__ = [
    "AppSettings",
    "DEFAULT_END_DELIMITER",
    "DEFAULT_START_DELIMITER",
    "ObservabilityConfig",
    "ParserSettings",
]
