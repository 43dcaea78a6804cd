# Standard library imports
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class EnrollmentState(str, Enum):
    """Credential lifecycle"""
    CURRENT = "CURRENT"
    SUPERSEDED = "SUPERSEDED"
    REVOKED = "REVOKED"


class CaptureSource(str, Enum):
    """Where the face capture was taken"""
    KIOSK = "KIOSK"
    TABLET = "TABLET"
    OPERATOR = "OPERATOR"
    OTHER = "OTHER"


def _check_score(name: str, value: Optional[float]) -> None:
    if value is not None and not 0.0 <= value <= 1.0:
        raise ValueError(f"{name} must be between 0 and 1")


@dataclass
class Enrollment:
    """
    Pure domain model for a biometric credential.

    A person has at most one CURRENT enrollment; a newer successful
    enrollment demotes the previous one to SUPERSEDED.
    """
    id: Optional[str]
    person_id: str
    state: EnrollmentState
    source: CaptureSource
    liveness_score: Optional[float] = None
    quality_score: Optional[float] = None
    created_at: Optional[datetime] = None
    superseded_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        """Business validations"""
        if not self.person_id:
            raise ValueError("Person ID is required")
        _check_score("Liveness score", self.liveness_score)
        _check_score("Quality score", self.quality_score)
