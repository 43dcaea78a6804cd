# Standard library imports
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class PersonKind(str, Enum):
    """Who the person is to the gym"""
    MEMBER = "MEMBER"
    WORKER = "WORKER"


@dataclass
class PersonProfile:
    """
    Incoming identity and profile fields for a person.

    Either national_id or email is needed to find an existing record;
    optional fields left as None never overwrite stored values.
    """
    kind: PersonKind
    first_name: str
    last_name: str
    national_id: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None

    def __post_init__(self) -> None:
        """Business validations"""
        if not self.first_name or not self.first_name.strip():
            raise ValueError("First name is required")
        if not self.last_name or not self.last_name.strip():
            raise ValueError("Last name is required")


@dataclass
class Person:
    """
    Pure domain model for Person entity - no external dependencies.

    Persons are created on the first enrollment attempt for an unknown
    identifier and are never deleted by the enrollment flow.
    """
    id: Optional[str]
    kind: PersonKind
    first_name: str
    last_name: str
    national_id: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        """Business validations"""
        if not self.first_name or not self.first_name.strip():
            raise ValueError("First name is required")
        if not self.last_name or not self.last_name.strip():
            raise ValueError("Last name is required")
