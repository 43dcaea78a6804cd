# Standard library imports
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class BlockRecord:
    """
    A ban on enrolling a person. Managed elsewhere; read-only here.
    """
    id: Optional[str]
    person_id: str
    active: bool
    expires_at: Optional[datetime] = None
    reason: Optional[str] = None

    def is_in_force(self, at: datetime) -> bool:
        """Active and either open-ended or expiring strictly after `at`."""
        if not self.active:
            return False
        return self.expires_at is None or self.expires_at > at
