# Standard library imports
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class Consent:
    """
    Recorded acceptance of a biometric-processing policy version.

    Unique per (person_id, policy_version).
    """
    id: Optional[str]
    person_id: str
    policy_version: str
    origin: Optional[str] = None
    created_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        """Business validations"""
        if not self.person_id:
            raise ValueError("Person ID is required")
        if not self.policy_version or not self.policy_version.strip():
            raise ValueError("Policy version is required")
