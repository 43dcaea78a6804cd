from abc import ABC, abstractmethod
from typing import List, Optional
from ..models.enrollment import Enrollment, CaptureSource
from .unit_of_work import TransactionHandle


class EnrollmentRepository(ABC):
    """Repository interface - credential lifecycle and stored embeddings"""

    @abstractmethod
    async def supersede_current(self, person_id: str, session: TransactionHandle) -> int:
        """Demote the person's CURRENT enrollment, if any. Returns how many were demoted"""
        pass

    @abstractmethod
    async def create_current(
        self,
        person_id: str,
        source: CaptureSource,
        liveness_score: Optional[float],
        quality_score: Optional[float],
        session: TransactionHandle,
    ) -> Enrollment:
        """Insert a new CURRENT enrollment"""
        pass

    @abstractmethod
    async def attach_embedding(
        self,
        enrollment_id: str,
        vector: List[float],
        session: TransactionHandle,
    ) -> None:
        """Store the normalized vector for an enrollment"""
        pass
