from abc import ABC, abstractmethod
from ..models.person import Person, PersonProfile
from .unit_of_work import TransactionHandle


class PersonRepository(ABC):
    """Repository interface - defines contract for person identity resolution"""

    @abstractmethod
    async def resolve(self, profile: PersonProfile, session: TransactionHandle) -> Person:
        """
        Find a person by national ID, then by email, and update it;
        create it when neither matches.
        """
        pass
