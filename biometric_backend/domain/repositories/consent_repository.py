from abc import ABC, abstractmethod
from typing import Optional
from ..models.consent import Consent
from .unit_of_work import TransactionHandle


class ConsentRepository(ABC):
    """Repository interface - records policy consent once per version"""

    @abstractmethod
    async def ensure_recorded(
        self,
        person_id: str,
        policy_version: str,
        origin: Optional[str],
        session: TransactionHandle,
    ) -> Optional[Consent]:
        """Record consent; return None if it was already recorded"""
        pass
