from typing import TYPE_CHECKING
from ...infrastructure.db.mongo_connection import (
    get_client,
    get_database,
    get_person_collection,
    get_consent_collection,
    get_enrollment_collection,
    get_embedding_collection,
    get_audit_collection,
    get_block_collection,
)

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class DatabaseProvider:
    """Centralized database connection provider - single source of truth for all DB connections"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        Register the client, database and all collections in the container.
        This is the ONLY place where database connections are registered.
        """
        container.register_singleton("mongo_client", get_client())
        container.register_singleton("database", get_database())
        container.register_singleton("person_collection", get_person_collection())
        container.register_singleton("consent_collection", get_consent_collection())
        container.register_singleton("enrollment_collection", get_enrollment_collection())
        container.register_singleton("embedding_collection", get_embedding_collection())
        container.register_singleton("audit_collection", get_audit_collection())
        container.register_singleton("block_collection", get_block_collection())
