# Standard library imports
from typing import Any, Dict, Optional

# External package imports
from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorClientSession
from pymongo.errors import PyMongoError

# Local application imports
from ...domain.repositories.audit_repository import AuditRepository
from ...domain.models.audit_entry import AuditEntry
from ...domain.constants import AuditFields
from ...utils.datetime_utils import utc_now
from .mongo_connection import get_audit_collection
from .mongo_errors import translate_mongo_error


class MongoAuditRepository(AuditRepository):
    """MongoDB implementation of AuditRepository. Insert-only."""

    def __init__(self, audit_collection: Optional[AsyncIOMotorCollection] = None) -> None:
        self.audit_collection = audit_collection if audit_collection is not None else get_audit_collection()

    async def record(
        self,
        actor_person_id: Optional[str],
        action: str,
        object_type: str,
        object_id: str,
        detail: Dict[str, Any],
        session: AsyncIOMotorClientSession,
    ) -> None:
        """
        Append one audit entry. Failures propagate and abort the transaction.
        """
        entry = AuditEntry(
            id=None,
            action=action,
            object_type=object_type,
            object_id=object_id,
            actor_person_id=actor_person_id,
            detail=dict(detail),
            created_at=utc_now(),
        )
        try:
            await self.audit_collection.insert_one(self._entry_to_dict(entry), session=session)
        except PyMongoError as e:
            raise translate_mongo_error(e, "Error writing audit entry") from e

    def _entry_to_dict(self, entry: AuditEntry) -> dict:
        return {
            AuditFields.ACTOR_PERSON_ID: entry.actor_person_id,
            AuditFields.ACTION: entry.action,
            AuditFields.OBJECT_TYPE: entry.object_type,
            AuditFields.OBJECT_ID: entry.object_id,
            AuditFields.DETAIL: entry.detail,
            AuditFields.CREATED_AT: entry.created_at,
        }
