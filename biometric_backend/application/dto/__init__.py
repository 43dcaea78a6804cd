from .enrollment_dto import (
    PersonInput,
    ConsentInput,
    EmbeddingInput,
    EnrollmentRequest,
    ThresholdsResponse,
    EnrollmentResponse,
    ErrorResponse,
)

__all__ = [
    "PersonInput",
    "ConsentInput",
    "EmbeddingInput",
    "EnrollmentRequest",
    "ThresholdsResponse",
    "EnrollmentResponse",
    "ErrorResponse",
]
