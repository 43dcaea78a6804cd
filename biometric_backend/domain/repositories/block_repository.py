from abc import ABC, abstractmethod
from .unit_of_work import TransactionHandle


class BlockRepository(ABC):
    """Repository interface - read-only view of enrollment bans"""

    @abstractmethod
    async def is_blocked(self, person_id: str, session: TransactionHandle) -> bool:
        """True if an active block with no expiry or a future expiry exists"""
        pass
