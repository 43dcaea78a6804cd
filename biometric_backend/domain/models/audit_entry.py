# Standard library imports
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass
class AuditEntry:
    """
    Append-only record of a state change.

    Entries are inserted once and never updated or deleted.
    """
    id: Optional[str]
    action: str
    object_type: str
    object_id: str
    actor_person_id: Optional[str] = None
    detail: Dict[str, Any] = field(default_factory=dict)
    created_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        """Business validations"""
        if not self.action:
            raise ValueError("Audit action is required")
        if not self.object_type or not self.object_id:
            raise ValueError("Audit subject is required")
