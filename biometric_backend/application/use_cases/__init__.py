from .enrollment import (
    EnrollPersonUseCase,
    EnrollmentPolicy,
    EnrollmentStage,
)

__all__ = [
    "EnrollPersonUseCase",
    "EnrollmentPolicy",
    "EnrollmentStage",
]
