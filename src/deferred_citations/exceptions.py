"""Exception hierarchy for deferred-citations.

Public parsing functions never raise for malformed model output; these
exceptions are used between internal layers and by the CLI.
"""


class DeferredCitationError(Exception):
    """Base exception for all deferred-citations errors."""


class CitationBlockError(DeferredCitationError):
    """Citation block could not be decoded as JSON, even after repair."""

    def __init__(self, message: str, raw_block: str = "") -> None:
        super().__init__(message)
        self.raw_block = raw_block


class InvalidInputError(DeferredCitationError):
    """Input handed to the CLI is not usable as a model response."""
