"""Process-level hooks: logging."""

from __future__ import annotations

from deferred_citations.hooks.logging_config import setup_logging

__all__ = ["setup_logging"]
