"""
Index bootstrap for the enrollment collections.

Run once at application startup. create_index is idempotent, so this is
safe on every boot. Uniqueness rules that the enrollment flow relies on
live here rather than in application code.
"""
# Standard library imports
import logging

# External package imports
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, IndexModel

# Local application imports
from ...domain.constants import (
    AuditFields,
    BlockFields,
    ConsentFields,
    EmbeddingFields,
    EnrollmentFields,
    PersonFields,
)
from ...domain.models.enrollment import EnrollmentState
from .mongo_connection import (
    AUDIT_ENTRIES,
    CONSENTS,
    ENROLLMENTS,
    FACE_EMBEDDINGS,
    PERSON_BLOCKS,
    PERSONS,
)

logger = logging.getLogger(__name__)

CURRENT_ENROLLMENT_INDEX = "uq_enrollment_current_per_person"

INDEXES = {
    PERSONS: [
        IndexModel(
            [(PersonFields.NATIONAL_ID, ASCENDING)],
            name="uq_person_national_id",
            unique=True,
            partialFilterExpression={PersonFields.NATIONAL_ID: {"$type": "string"}},
        ),
        IndexModel(
            [(PersonFields.EMAIL, ASCENDING)],
            name="uq_person_email",
            unique=True,
            partialFilterExpression={PersonFields.EMAIL: {"$type": "string"}},
        ),
    ],
    CONSENTS: [
        IndexModel(
            [(ConsentFields.PERSON_ID, ASCENDING), (ConsentFields.POLICY_VERSION, ASCENDING)],
            name="uq_consent_person_policy",
            unique=True,
        ),
    ],
    ENROLLMENTS: [
        IndexModel(
            [(EnrollmentFields.PERSON_ID, ASCENDING)],
            name=CURRENT_ENROLLMENT_INDEX,
            unique=True,
            partialFilterExpression={EnrollmentFields.STATE: EnrollmentState.CURRENT.value},
        ),
        IndexModel(
            [(EnrollmentFields.PERSON_ID, ASCENDING), (EnrollmentFields.CREATED_AT, ASCENDING)],
            name="ix_enrollment_person_created",
        ),
    ],
    FACE_EMBEDDINGS: [
        IndexModel(
            [(EmbeddingFields.ENROLLMENT_ID, ASCENDING)],
            name="uq_embedding_enrollment",
            unique=True,
        ),
    ],
    AUDIT_ENTRIES: [
        IndexModel(
            [(AuditFields.OBJECT_TYPE, ASCENDING), (AuditFields.OBJECT_ID, ASCENDING)],
            name="ix_audit_object",
        ),
    ],
    PERSON_BLOCKS: [
        IndexModel(
            [(BlockFields.PERSON_ID, ASCENDING), (BlockFields.ACTIVE, ASCENDING)],
            name="ix_block_person_active",
        ),
    ],
}


async def ensure_indexes(database: AsyncIOMotorDatabase) -> None:
    """
    Create every index the enrollment flow depends on.

    Args:
        database: Target MongoDB database
    """
    for collection_name, indexes in INDEXES.items():
        names = await database[collection_name].create_indexes(indexes)
        logger.info(f"Indexes ensured on {collection_name}: {', '.join(names)}")
