"""Nested pydantic-settings configuration for deferred-citations.

Each sub-config reads its own ``DEFERRED_CITATIONS_<GROUP>_*`` env vars::

    export DEFERRED_CITATIONS_PARSER_START_DELIMITER='<<<CITES>>>'
    export DEFERRED_CITATIONS_OBSERVABILITY_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings

DEFAULT_START_DELIMITER = "<<<CITATION_DATA>>>"
DEFAULT_END_DELIMITER = "<<<END_CITATION_DATA>>>"


class ParserSettings(BaseSettings):
    """Citation block parsing configuration.

    Env vars use ``DEFERRED_CITATIONS_PARSER_`` prefix.  The delimiters must
    match whatever the prompt template told the model to emit.
    """

    model_config = {"env_prefix": "DEFERRED_CITATIONS_PARSER_"}

    start_delimiter: str = Field(default=DEFAULT_START_DELIMITER, min_length=1)
    end_delimiter: str = Field(default=DEFAULT_END_DELIMITER, min_length=1)
    close_unclosed_brackets: bool = True
    log_repairs: bool = True


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Env vars use ``DEFERRED_CITATIONS_OBSERVABILITY_`` prefix.  ``json_logs``
    left unset picks JSON lines when stderr is not a terminal.
    """

    model_config = {"env_prefix": "DEFERRED_CITATIONS_OBSERVABILITY_"}

    log_level: str = "INFO"
    json_logs: Optional[bool] = None


class AppSettings(BaseSettings):
    """Top-level settings aggregating all sub-configs."""

    parser: ParserSettings = Field(default_factory=ParserSettings)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)
