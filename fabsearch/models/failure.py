"""
Failure classification for tool calls.

Every failure a tool can hit is one of a small set of known kinds. Tools
never let these escape as protocol faults: they are caught at the tool
boundary and reported in-band as text (see `fabsearch.mcp.tools`).

Kinds:
- EXTERNAL_API_ERROR: the card database could not be reached or answered badly
- PARSE_FAILED: a card page could not be parsed as markup at all
- NOT_FOUND: an identifier lookup found no exact match
- MISSING_REQUIRED: a required identifier was missing or empty

Field-level misses while scraping a card page are NOT failures. They
degrade to empty values.
"""

from enum import Enum


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Input validation failures
    MISSING_REQUIRED = "missing_required"

    # Resource failures
    NOT_FOUND = "not_found"

    # Upstream failures
    EXTERNAL_API_ERROR = "external_api_error"
    PARSE_FAILED = "parse_failed"


class KnownError(Exception):
    """
    Base class for exceptions that represent known, explainable failures.

    Subclass this for errors where the system knows exactly what went wrong.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        super().__init__(message)


class UpstreamError(KnownError):
    """
    Raised when a request to the card database fails.

    Covers transport failures (connect, read, timeout), non-2xx status codes,
    and response bodies that do not decode to the expected shape.
    """

    def __init__(self, message: str, status_code: int | None = None, detail: str | None = None):
        self.status_code = status_code
        super().__init__(
            kind=FailureKind.EXTERNAL_API_ERROR,
            message=message,
            detail=detail,
            suggestion="The card database may be unavailable. Try again later.",
        )


class ExtractionError(KnownError):
    """Raised when a card page cannot be parsed as markup."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(kind=FailureKind.PARSE_FAILED, message=message, detail=detail)


class NotFoundError(KnownError):
    """Raised when an identifier lookup has no exact match."""

    def __init__(self, message: str):
        super().__init__(
            kind=FailureKind.NOT_FOUND,
            message=message,
            suggestion="Use the search tool to find a valid card id.",
        )


class ValidationError(KnownError):
    """Raised when a required tool argument is missing or empty."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(
            kind=FailureKind.MISSING_REQUIRED,
            message=f"'{field}' is required and must be a non-empty string",
        )
