"""
Error taxonomy for the enrollment transaction.

Every failure the orchestrator can surface has its own class and a stable
error code, so the API layer can map each one to a distinct client outcome.
"""
from typing import Any, Dict, Optional


class EnrollmentError(Exception):
    """
    Base class for all enrollment errors.

    Args:
        message: Human-readable error message
        details: Extra structured context (never contains embedding values)
    """

    error_code: str = "ENROLLMENT_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Serializable form used in API error bodies and logs."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class InvalidRequestShape(EnrollmentError):
    """Malformed request: missing field or wrong type."""
    error_code = "INVALID_REQUEST_SHAPE"


class PersonBlocked(EnrollmentError):
    """The person has an active ban."""
    error_code = "PERSON_BLOCKED"


class ConsentNotGiven(EnrollmentError):
    """Consent flag was not explicitly true."""
    error_code = "CONSENT_NOT_GIVEN"


class InvalidEmbedding(EnrollmentError):
    """Parent of every embedding rejection; the caller must re-capture."""
    error_code = "INVALID_EMBEDDING"


class EmbeddingMissing(InvalidEmbedding):
    error_code = "EMBEDDING_MISSING"


class InvalidEmbeddingShape(InvalidEmbedding):
    error_code = "INVALID_EMBEDDING_SHAPE"


class InvalidEmbeddingDimension(InvalidEmbedding):
    error_code = "INVALID_EMBEDDING_DIMENSION"


class InvalidEmbeddingValue(InvalidEmbedding):
    error_code = "INVALID_EMBEDDING_VALUE"


class ZeroNormEmbedding(InvalidEmbedding):
    error_code = "ZERO_NORM_EMBEDDING"


class CaptureRejected(EnrollmentError):
    """Capture scores below the configured thresholds."""
    error_code = "CAPTURE_REJECTED"


class LivenessTooLow(CaptureRejected):
    error_code = "LIVENESS_TOO_LOW"


class QualityTooLow(CaptureRejected):
    error_code = "QUALITY_TOO_LOW"


class PersistenceError(EnrollmentError):
    """Storage or transaction failure. Nothing was committed; safe to retry."""
    error_code = "PERSISTENCE_ERROR"


class TransactionConflict(PersistenceError):
    """Transient write conflict with a concurrent transaction."""
    error_code = "TRANSACTION_CONFLICT"
