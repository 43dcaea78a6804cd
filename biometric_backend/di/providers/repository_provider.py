from typing import TYPE_CHECKING
from ...core.config import get_settings
from ...domain.repositories.unit_of_work import UnitOfWork
from ...domain.repositories.person_repository import PersonRepository
from ...domain.repositories.block_repository import BlockRepository
from ...domain.repositories.consent_repository import ConsentRepository
from ...domain.repositories.enrollment_repository import EnrollmentRepository
from ...domain.repositories.audit_repository import AuditRepository
from ...infrastructure.db.mongo_unit_of_work import MongoUnitOfWork
from ...infrastructure.db.mongo_person_repository import MongoPersonRepository
from ...infrastructure.db.mongo_block_repository import MongoBlockRepository
from ...infrastructure.db.mongo_consent_repository import MongoConsentRepository
from ...infrastructure.db.mongo_enrollment_repository import MongoEnrollmentRepository
from ...infrastructure.db.mongo_audit_repository import MongoAuditRepository

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class RepositoryProvider:
    """Repository registration provider - wires domain interfaces to infrastructure implementations"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        Register the unit of work and all repository implementations.
        Gets collections from database provider and creates repository instances.
        """
        settings = get_settings()

        # Domain interfaces -> Infrastructure implementations
        container.register_singleton(
            UnitOfWork,
            MongoUnitOfWork(
                client=container.get("mongo_client"),
                max_commit_time_ms=int(settings.enrollment_transaction_timeout_seconds * 1000),
            )
        )

        container.register_singleton(
            PersonRepository,
            MongoPersonRepository(person_collection=container.get("person_collection"))
        )

        container.register_singleton(
            BlockRepository,
            MongoBlockRepository(block_collection=container.get("block_collection"))
        )

        container.register_singleton(
            ConsentRepository,
            MongoConsentRepository(consent_collection=container.get("consent_collection"))
        )

        container.register_singleton(
            EnrollmentRepository,
            MongoEnrollmentRepository(
                enrollment_collection=container.get("enrollment_collection"),
                embedding_collection=container.get("embedding_collection"),
            )
        )

        container.register_singleton(
            AuditRepository,
            MongoAuditRepository(audit_collection=container.get("audit_collection"))
        )
