# Standard library imports
import logging
from typing import Optional

# External package imports
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase, AsyncIOMotorCollection

# Local application imports
from ...core.config import get_settings

logger = logging.getLogger(__name__)

PERSONS = "persons"
CONSENTS = "consents"
ENROLLMENTS = "enrollments"
FACE_EMBEDDINGS = "face_embeddings"
AUDIT_ENTRIES = "audit_entries"
PERSON_BLOCKS = "person_blocks"


# Global MongoDB connection instances (singleton pattern)
_mongo_client: Optional[AsyncIOMotorClient] = None
_mongo_database: Optional[AsyncIOMotorDatabase] = None


def get_client() -> AsyncIOMotorClient:
    """
    Get MongoDB client instance (singleton pattern)

    The client owns the bounded connection pool shared by every request.
    Transactions need a replica set or sharded cluster.

    Returns:
        MongoDB client instance
    """
    global _mongo_client

    if _mongo_client is not None:
        return _mongo_client

    settings = get_settings()
    _mongo_client = AsyncIOMotorClient(
        settings.mongo_uri,
        maxPoolSize=settings.mongo_max_pool_size,
        minPoolSize=settings.mongo_min_pool_size,
        waitQueueTimeoutMS=settings.mongo_wait_queue_timeout_ms,
        serverSelectionTimeoutMS=settings.mongo_server_selection_timeout_ms,
        tz_aware=True,
    )
    logger.info(
        f"MongoDB client created (pool max={settings.mongo_max_pool_size}, "
        f"min={settings.mongo_min_pool_size})"
    )
    return _mongo_client


def get_database() -> AsyncIOMotorDatabase:
    """
    Get MongoDB database instance (singleton pattern)

    Returns:
        MongoDB database instance
    """
    global _mongo_database

    if _mongo_database is not None:
        return _mongo_database

    _mongo_database = get_client()[get_settings().mongo_database_name]
    return _mongo_database


def close_client() -> None:
    """Close the client and drop the cached handles (application shutdown)."""
    global _mongo_client, _mongo_database
    if _mongo_client is not None:
        _mongo_client.close()
        logger.info("MongoDB client closed")
    _mongo_client = None
    _mongo_database = None


def get_person_collection() -> AsyncIOMotorCollection:
    """Get persons collection from MongoDB"""
    return get_database()[PERSONS]


def get_consent_collection() -> AsyncIOMotorCollection:
    """Get consents collection from MongoDB"""
    return get_database()[CONSENTS]


def get_enrollment_collection() -> AsyncIOMotorCollection:
    """Get enrollments collection from MongoDB"""
    return get_database()[ENROLLMENTS]


def get_embedding_collection() -> AsyncIOMotorCollection:
    """Get face embeddings collection from MongoDB"""
    return get_database()[FACE_EMBEDDINGS]


def get_audit_collection() -> AsyncIOMotorCollection:
    """Get audit entries collection from MongoDB"""
    return get_database()[AUDIT_ENTRIES]


def get_block_collection() -> AsyncIOMotorCollection:
    """Get person blocks collection from MongoDB"""
    return get_database()[PERSON_BLOCKS]
