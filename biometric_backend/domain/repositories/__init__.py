from .unit_of_work import UnitOfWork, TransactionHandle
from .person_repository import PersonRepository
from .block_repository import BlockRepository
from .consent_repository import ConsentRepository
from .enrollment_repository import EnrollmentRepository
from .audit_repository import AuditRepository

__all__ = [
    "UnitOfWork",
    "TransactionHandle",
    "PersonRepository",
    "BlockRepository",
    "ConsentRepository",
    "EnrollmentRepository",
    "AuditRepository",
]
