from .enroll_person import EnrollPersonUseCase, EnrollmentPolicy, EnrollmentStage

__all__ = ["EnrollPersonUseCase", "EnrollmentPolicy", "EnrollmentStage"]
