# Standard library imports
import logging
from datetime import datetime
from typing import Any, Dict, Optional

# External package imports
from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorClientSession
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError, PyMongoError

# Local application imports
from ...domain.repositories.person_repository import PersonRepository
from ...domain.models.person import Person, PersonKind, PersonProfile
from ...domain.constants import PersonFields
from ...domain.errors import PersistenceError
from ...utils.datetime_utils import utc_now, ensure_utc
from .mongo_connection import get_person_collection
from .mongo_errors import translate_mongo_error

logger = logging.getLogger(__name__)


class MongoPersonRepository(PersonRepository):
    """MongoDB implementation of PersonRepository"""

    def __init__(self, person_collection: Optional[AsyncIOMotorCollection] = None) -> None:
        self.person_collection = person_collection if person_collection is not None else get_person_collection()

    async def resolve(self, profile: PersonProfile, session: AsyncIOMotorClientSession) -> Person:
        """
        Find-or-create a person.

        Lookup is by national ID first, then by email. An existing record
        gets kind and names overwritten and national ID, email and phone
        filled in only where the incoming value is present. The person
        document is written in both branches, which makes concurrent
        transactions for the same person conflict with each other.

        Args:
            profile: Incoming identity and profile fields
            session: Active transaction handle

        Returns:
            The updated or newly created Person
        """
        try:
            existing = await self._find_existing(profile, session)
            now = utc_now()

            if existing is not None:
                updated = await self.person_collection.find_one_and_update(
                    {PersonFields.MONGO_ID: existing[PersonFields.MONGO_ID]},
                    {"$set": self._update_fields(profile, now)},
                    return_document=ReturnDocument.AFTER,
                    session=session,
                )
                if updated is None:
                    raise PersistenceError(
                        f"Person {existing[PersonFields.MONGO_ID]} was found but could not be updated"
                    )
                return self._document_to_person(updated)

            document = self._profile_to_document(profile, now)
            result = await self.person_collection.insert_one(document, session=session)
            document[PersonFields.MONGO_ID] = result.inserted_id
            logger.debug(f"Created person {result.inserted_id}")
            return self._document_to_person(document)
        except DuplicateKeyError as e:
            raise PersistenceError(
                "National ID or email already belongs to another person",
                {"driver_error": e.__class__.__name__, "code": e.code},
            ) from e
        except PyMongoError as e:
            raise translate_mongo_error(e, "Error resolving person") from e

    async def _find_existing(
        self, profile: PersonProfile, session: AsyncIOMotorClientSession
    ) -> Optional[Dict[str, Any]]:
        if profile.national_id:
            document = await self.person_collection.find_one(
                {PersonFields.NATIONAL_ID: profile.national_id}, session=session
            )
            if document is not None:
                return document
        if profile.email:
            return await self.person_collection.find_one(
                {PersonFields.EMAIL: profile.email}, session=session
            )
        return None

    def _update_fields(self, profile: PersonProfile, now: datetime) -> Dict[str, Any]:
        """
        Build the $set for an existing person.

        Coalescing is explicit: optional identifiers are only written when
        the incoming value is not None, so a stored value is never replaced
        by a null.
        """
        fields: Dict[str, Any] = {
            PersonFields.KIND: profile.kind.value,
            PersonFields.FIRST_NAME: profile.first_name,
            PersonFields.LAST_NAME: profile.last_name,
            PersonFields.UPDATED_AT: now,
        }
        if profile.national_id is not None:
            fields[PersonFields.NATIONAL_ID] = profile.national_id
        if profile.email is not None:
            fields[PersonFields.EMAIL] = profile.email
        if profile.phone is not None:
            fields[PersonFields.PHONE] = profile.phone
        return fields

    def _profile_to_document(self, profile: PersonProfile, now: datetime) -> Dict[str, Any]:
        # Absent identifiers are left out so the partial unique indexes ignore them
        document: Dict[str, Any] = {
            PersonFields.KIND: profile.kind.value,
            PersonFields.FIRST_NAME: profile.first_name,
            PersonFields.LAST_NAME: profile.last_name,
            PersonFields.CREATED_AT: now,
            PersonFields.UPDATED_AT: now,
        }
        if profile.national_id is not None:
            document[PersonFields.NATIONAL_ID] = profile.national_id
        if profile.email is not None:
            document[PersonFields.EMAIL] = profile.email
        if profile.phone is not None:
            document[PersonFields.PHONE] = profile.phone
        return document

    def _document_to_person(self, document: dict) -> Person:
        """
        Convert MongoDB document to Person domain model

        Args:
            document: MongoDB document dictionary

        Returns:
            Person domain model
        """
        if not document or PersonFields.MONGO_ID not in document:
            raise ValueError("Invalid document: missing _id field")

        return Person(
            id=str(document[PersonFields.MONGO_ID]),
            kind=PersonKind(document[PersonFields.KIND]),
            first_name=document.get(PersonFields.FIRST_NAME, ""),
            last_name=document.get(PersonFields.LAST_NAME, ""),
            national_id=document.get(PersonFields.NATIONAL_ID),
            email=document.get(PersonFields.EMAIL),
            phone=document.get(PersonFields.PHONE),
            created_at=ensure_utc(document.get(PersonFields.CREATED_AT)),
            updated_at=ensure_utc(document.get(PersonFields.UPDATED_AT)),
        )
