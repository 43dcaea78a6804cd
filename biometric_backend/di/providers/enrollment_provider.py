from typing import TYPE_CHECKING
from ...core.config import get_settings
from ...domain.repositories.unit_of_work import UnitOfWork
from ...domain.repositories.person_repository import PersonRepository
from ...domain.repositories.block_repository import BlockRepository
from ...domain.repositories.consent_repository import ConsentRepository
from ...domain.repositories.enrollment_repository import EnrollmentRepository
from ...domain.repositories.audit_repository import AuditRepository
from ...application.use_cases.enrollment.enroll_person import EnrollPersonUseCase, EnrollmentPolicy

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class EnrollmentProvider:
    """Enrollment use case provider"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        Register the enrollment policy (read once from settings) and the
        enrollment use case factory.
        """
        container.register_singleton(
            EnrollmentPolicy,
            EnrollmentPolicy.from_settings(get_settings())
        )

        container.register_factory(
            EnrollPersonUseCase,
            lambda: EnrollPersonUseCase(
                unit_of_work=container.get(UnitOfWork),
                person_repository=container.get(PersonRepository),
                block_repository=container.get(BlockRepository),
                consent_repository=container.get(ConsentRepository),
                enrollment_repository=container.get(EnrollmentRepository),
                audit_repository=container.get(AuditRepository),
                policy=container.get(EnrollmentPolicy),
            )
        )
