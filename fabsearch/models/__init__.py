from fabsearch.models.card import (
    CardDetail,
    CardSummary,
    FetchedDocument,
    PrintVariant,
    SearchHit,
    VariantRef,
    language_from_print_id,
)
from fabsearch.models.failure import (
    ExtractionError,
    FailureKind,
    KnownError,
    NotFoundError,
    UpstreamError,
    ValidationError,
)

__all__ = [
    "CardDetail",
    "CardSummary",
    "ExtractionError",
    "FailureKind",
    "FetchedDocument",
    "KnownError",
    "NotFoundError",
    "PrintVariant",
    "SearchHit",
    "UpstreamError",
    "ValidationError",
    "VariantRef",
    "language_from_print_id",
]
