# Standard library imports
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

# External package imports
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorClientSession
from pymongo import ReadPreference
from pymongo.errors import PyMongoError
from pymongo.read_concern import ReadConcern
from pymongo.write_concern import WriteConcern

# Local application imports
from ...domain.repositories.unit_of_work import UnitOfWork
from .mongo_connection import get_client
from .mongo_errors import translate_mongo_error

logger = logging.getLogger(__name__)


class MongoUnitOfWork(UnitOfWork):
    """
    MongoDB implementation of UnitOfWork.

    Each `begin()` checks out a client session, runs a multi-document
    transaction on it and hands the session to repositories as the
    transaction handle.
    """

    def __init__(
        self,
        client: Optional[AsyncIOMotorClient] = None,
        max_commit_time_ms: Optional[int] = None,
    ) -> None:
        self.client = client if client is not None else get_client()
        self.max_commit_time_ms = max_commit_time_ms

    @asynccontextmanager
    async def begin(self) -> AsyncIterator[AsyncIOMotorClientSession]:
        """
        Open a session and a snapshot/majority transaction.

        Commit on normal exit; abort on any exception, including
        asyncio.CancelledError, so a cancelled request leaves nothing behind.
        The session is ended on every path.

        Raises:
            TransactionConflict: Commit hit a transient write conflict
            PersistenceError: Session, start or commit failed
        """
        try:
            session = await self.client.start_session()
        except PyMongoError as e:
            raise translate_mongo_error(e, "Error starting database session") from e

        try:
            session.start_transaction(
                read_concern=ReadConcern("snapshot"),
                write_concern=WriteConcern(w="majority"),
                read_preference=ReadPreference.PRIMARY,
                max_commit_time_ms=self.max_commit_time_ms,
            )
            try:
                yield session
            except BaseException:
                if session.in_transaction:
                    await session.abort_transaction()
                    logger.debug("Transaction aborted")
                raise

            try:
                await session.commit_transaction()
            except PyMongoError as e:
                raise translate_mongo_error(e, "Error committing transaction") from e
        finally:
            await session.end_session()
