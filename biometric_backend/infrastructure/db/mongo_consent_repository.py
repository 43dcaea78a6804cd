# Standard library imports
from typing import Optional

# External package imports
from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorClientSession
from bson import ObjectId
from pymongo.errors import PyMongoError

# Local application imports
from ...domain.repositories.consent_repository import ConsentRepository
from ...domain.models.consent import Consent
from ...domain.constants import ConsentFields
from ...utils.datetime_utils import utc_now
from .mongo_connection import get_consent_collection
from .mongo_errors import translate_mongo_error


class MongoConsentRepository(ConsentRepository):
    """MongoDB implementation of ConsentRepository"""

    def __init__(self, consent_collection: Optional[AsyncIOMotorCollection] = None) -> None:
        self.consent_collection = consent_collection if consent_collection is not None else get_consent_collection()

    async def ensure_recorded(
        self,
        person_id: str,
        policy_version: str,
        origin: Optional[str],
        session: AsyncIOMotorClientSession,
    ) -> Optional[Consent]:
        """
        Record consent for a policy version once.

        A duplicate-key error aborts a MongoDB transaction, so instead of
        insert-and-catch this is one upsert keyed on (person_id,
        policy_version) that only writes on insert. An existing consent is
        left untouched.

        Args:
            person_id: Person giving consent
            policy_version: Policy version accepted
            origin: Where the consent came from (e.g. client IP)
            session: Active transaction handle

        Returns:
            The new Consent, or None if it was already recorded
        """
        now = utc_now()
        key = {
            ConsentFields.PERSON_ID: ObjectId(person_id),
            ConsentFields.POLICY_VERSION: policy_version,
        }
        try:
            result = await self.consent_collection.update_one(
                key,
                {"$setOnInsert": {ConsentFields.ORIGIN: origin, ConsentFields.CREATED_AT: now}},
                upsert=True,
                session=session,
            )
        except PyMongoError as e:
            raise translate_mongo_error(e, "Error recording consent") from e

        if result.upserted_id is None:
            return None

        return Consent(
            id=str(result.upserted_id),
            person_id=person_id,
            policy_version=policy_version,
            origin=origin,
            created_at=now,
        )
