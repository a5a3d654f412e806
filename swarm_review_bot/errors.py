"""Error taxonomy shared by the Swarm client and the interaction handlers."""

from __future__ import annotations


class ReviewBotError(Exception):
    """Base class for every error raised by the review bot."""


class ValidationError(ReviewBotError):
    """Raised when a user supplied argument is blank or malformed."""


class NotFoundError(ReviewBotError):
    """Raised when Swarm has no record for the requested entity."""


class UpstreamError(ReviewBotError):
    """Raised when Swarm is unreachable or answers with an unusable payload."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ParseError(ReviewBotError, ValueError):
    """Raised when an action identifier does not follow ``<operation>_<id>``."""
