# Standard library imports
from typing import List, Optional

# External package imports
from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorClientSession
from bson import ObjectId
from pymongo.errors import PyMongoError

# Local application imports
from ...domain.repositories.enrollment_repository import EnrollmentRepository
from ...domain.models.enrollment import Enrollment, EnrollmentState, CaptureSource
from ...domain.models.face_embedding import FaceEmbedding
from ...domain.constants import EnrollmentFields, EmbeddingFields
from ...utils.datetime_utils import utc_now
from .mongo_connection import get_enrollment_collection, get_embedding_collection
from .mongo_errors import translate_mongo_error


class MongoEnrollmentRepository(EnrollmentRepository):
    """
    MongoDB implementation of EnrollmentRepository.

    The partial unique index on enrollments(person_id) where
    state == "CURRENT" (see mongo_indexes) guarantees at most one current
    credential per person even if two transactions race.
    """

    def __init__(
        self,
        enrollment_collection: Optional[AsyncIOMotorCollection] = None,
        embedding_collection: Optional[AsyncIOMotorCollection] = None,
    ) -> None:
        self.enrollment_collection = (
            enrollment_collection if enrollment_collection is not None else get_enrollment_collection()
        )
        self.embedding_collection = (
            embedding_collection if embedding_collection is not None else get_embedding_collection()
        )

    async def supersede_current(self, person_id: str, session: AsyncIOMotorClientSession) -> int:
        """
        Demote the person's CURRENT enrollment to SUPERSEDED.

        Args:
            person_id: Person whose credential is being replaced
            session: Active transaction handle

        Returns:
            Number of enrollments demoted (0 when there was none)
        """
        try:
            result = await self.enrollment_collection.update_many(
                {
                    EnrollmentFields.PERSON_ID: ObjectId(person_id),
                    EnrollmentFields.STATE: EnrollmentState.CURRENT.value,
                },
                {
                    "$set": {
                        EnrollmentFields.STATE: EnrollmentState.SUPERSEDED.value,
                        EnrollmentFields.SUPERSEDED_AT: utc_now(),
                    }
                },
                session=session,
            )
        except PyMongoError as e:
            raise translate_mongo_error(e, "Error superseding current enrollment") from e
        return result.modified_count

    async def create_current(
        self,
        person_id: str,
        source: CaptureSource,
        liveness_score: Optional[float],
        quality_score: Optional[float],
        session: AsyncIOMotorClientSession,
    ) -> Enrollment:
        """
        Insert a new CURRENT enrollment.

        Returns:
            Enrollment with its generated ID and creation time
        """
        enrollment = Enrollment(
            id=None,
            person_id=person_id,
            state=EnrollmentState.CURRENT,
            source=source,
            liveness_score=liveness_score,
            quality_score=quality_score,
            created_at=utc_now(),
        )
        try:
            result = await self.enrollment_collection.insert_one(
                self._enrollment_to_dict(enrollment), session=session
            )
        except PyMongoError as e:
            raise translate_mongo_error(e, "Error creating enrollment") from e

        enrollment.id = str(result.inserted_id)
        return enrollment

    async def attach_embedding(
        self,
        enrollment_id: str,
        vector: List[float],
        session: AsyncIOMotorClientSession,
    ) -> None:
        """
        Store the normalized vector keyed by enrollment ID.

        Stored as a plain array of doubles with its width, which Atlas
        vector search indexes can consume directly.

        Raises:
            PersistenceError: If the insert fails
        """
        embedding = FaceEmbedding(enrollment_id=enrollment_id, vector=list(vector), created_at=utc_now())
        try:
            await self.embedding_collection.insert_one(
                {
                    EmbeddingFields.ENROLLMENT_ID: ObjectId(embedding.enrollment_id),
                    EmbeddingFields.DIMS: embedding.dims,
                    EmbeddingFields.VECTOR: embedding.vector,
                    EmbeddingFields.CREATED_AT: embedding.created_at,
                },
                session=session,
            )
        except PyMongoError as e:
            raise translate_mongo_error(e, "Error storing embedding") from e

    def _enrollment_to_dict(self, enrollment: Enrollment) -> dict:
        """
        Convert Enrollment domain model to MongoDB document

        Args:
            enrollment: Enrollment domain model

        Returns:
            Dictionary ready for MongoDB storage
        """
        return {
            EnrollmentFields.PERSON_ID: ObjectId(enrollment.person_id),
            EnrollmentFields.STATE: enrollment.state.value,
            EnrollmentFields.SOURCE: enrollment.source.value,
            EnrollmentFields.LIVENESS_SCORE: enrollment.liveness_score,
            EnrollmentFields.QUALITY_SCORE: enrollment.quality_score,
            EnrollmentFields.CREATED_AT: enrollment.created_at,
            EnrollmentFields.SUPERSEDED_AT: None,
        }
