from .mongo_connection import (
    get_client,
    get_database,
    close_client,
    get_person_collection,
    get_consent_collection,
    get_enrollment_collection,
    get_embedding_collection,
    get_audit_collection,
    get_block_collection,
)
from .mongo_unit_of_work import MongoUnitOfWork
from .mongo_person_repository import MongoPersonRepository
from .mongo_block_repository import MongoBlockRepository
from .mongo_consent_repository import MongoConsentRepository
from .mongo_enrollment_repository import MongoEnrollmentRepository
from .mongo_audit_repository import MongoAuditRepository
from .mongo_indexes import ensure_indexes

__all__ = [
    "get_client",
    "get_database",
    "close_client",
    "get_person_collection",
    "get_consent_collection",
    "get_enrollment_collection",
    "get_embedding_collection",
    "get_audit_collection",
    "get_block_collection",
    "MongoUnitOfWork",
    "MongoPersonRepository",
    "MongoBlockRepository",
    "MongoConsentRepository",
    "MongoEnrollmentRepository",
    "MongoAuditRepository",
    "ensure_indexes",
]
