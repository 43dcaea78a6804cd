from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
from .unit_of_work import TransactionHandle


class AuditRepository(ABC):
    """Repository interface - append-only audit trail"""

    @abstractmethod
    async def record(
        self,
        actor_person_id: Optional[str],
        action: str,
        object_type: str,
        object_id: str,
        detail: Dict[str, Any],
        session: TransactionHandle,
    ) -> None:
        """Append one audit entry"""
        pass
