"""Error taxonomy for article extraction.

Every error carries a human-readable message, the originating address and
the HTTP status the service answers with. None of them are retried
internally.
"""

from typing import Any, Optional


class ExtractionError(Exception):
    """Base class for all failures surfaced to callers."""

    status_code = 500
    code = "extraction_error"

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.url = url
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Build the JSON error body."""
        body: dict[str, Any] = {"error": self.message, "code": self.code}
        if self.url:
            body["url"] = self.url
        body.update(self.details)
        return body


class MissingParameter(ExtractionError):
    """No target address was supplied."""

    status_code = 400
    code = "missing_parameter"


class InvalidParameter(ExtractionError):
    """A supplied parameter cannot be used (e.g. a malformed selector)."""

    status_code = 400
    code = "invalid_parameter"


class UpstreamUnavailable(ExtractionError):
    """The fetch provider failed or returned no HTML."""

    status_code = 502
    code = "upstream_unavailable"


class NoContentFound(ExtractionError):
    """Neither the selector chain nor reader mode produced a region."""

    status_code = 404
    code = "no_content_found"


class ContentTooShort(ExtractionError):
    """Cleaned content is below the minimum length gate."""

    status_code = 404
    code = "content_too_short"


class InternalError(ExtractionError):
    """Unexpected failure inside a transform."""

    status_code = 500
    code = "internal_error"
