# Standard library imports
from typing import Optional

# External package imports
from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorClientSession
from bson import ObjectId
from bson.errors import InvalidId
from pymongo.errors import PyMongoError

# Local application imports
from ...domain.repositories.block_repository import BlockRepository
from ...domain.constants import BlockFields
from ...domain.errors import PersistenceError
from ...utils.datetime_utils import utc_now
from .mongo_connection import get_block_collection
from .mongo_errors import translate_mongo_error


class MongoBlockRepository(BlockRepository):
    """MongoDB implementation of BlockRepository (read-only)"""

    def __init__(self, block_collection: Optional[AsyncIOMotorCollection] = None) -> None:
        self.block_collection = block_collection if block_collection is not None else get_block_collection()

    async def is_blocked(self, person_id: str, session: AsyncIOMotorClientSession) -> bool:
        """
        Check for a block in force for the person.

        A block is in force when it is active and its expiry is missing,
        null or strictly later than now. The read runs inside the caller's
        transaction snapshot.

        Args:
            person_id: Person ID to check
            session: Active transaction handle

        Returns:
            True if the person is blocked

        Raises:
            PersistenceError: If person_id is not a valid ObjectId or the read fails
        """
        try:
            object_id = ObjectId(person_id)
        except (InvalidId, TypeError) as e:
            raise PersistenceError(
                f"Cannot check blocks for malformed person ID {person_id!r}",
                {"person_id": str(person_id)},
            ) from e

        query = {
            BlockFields.PERSON_ID: object_id,
            BlockFields.ACTIVE: True,
            "$or": [
                {BlockFields.EXPIRES_AT: None},
                {BlockFields.EXPIRES_AT: {"$gt": utc_now()}},
            ],
        }
        try:
            document = await self.block_collection.find_one(
                query, projection={BlockFields.MONGO_ID: 1}, session=session
            )
        except PyMongoError as e:
            raise translate_mongo_error(e, "Error checking person block") from e
        return document is not None
