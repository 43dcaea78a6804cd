# Standard library imports
import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

# Local application imports
from ....core.config import Settings
from ....domain.constants import AuditActions, AuditObjectTypes
from ....domain.errors import (
    ConsentNotGiven,
    EmbeddingMissing,
    EnrollmentError,
    InvalidEmbeddingDimension,
    LivenessTooLow,
    PersistenceError,
    PersonBlocked,
    QualityTooLow,
    TransactionConflict,
)
from ....domain.models.enrollment import EnrollmentState
from ....domain.models.person import PersonProfile
from ....domain.repositories.audit_repository import AuditRepository
from ....domain.repositories.block_repository import BlockRepository
from ....domain.repositories.consent_repository import ConsentRepository
from ....domain.repositories.enrollment_repository import EnrollmentRepository
from ....domain.repositories.person_repository import PersonRepository
from ....domain.repositories.unit_of_work import TransactionHandle, UnitOfWork
from ....domain.services import vector_validator
from ...dto.enrollment_dto import EnrollmentRequest, EnrollmentResponse, ThresholdsResponse

logger = logging.getLogger(__name__)


class EnrollmentStage(str, Enum):
    """Progress of one enrollment attempt"""
    STARTED = "STARTED"
    PERSON_RESOLVED = "PERSON_RESOLVED"
    BLOCK_CHECKED = "BLOCK_CHECKED"
    CONSENT_RECORDED = "CONSENT_RECORDED"
    EMBEDDING_VALIDATED = "EMBEDDING_VALIDATED"
    CREDENTIAL_REPLACED = "CREDENTIAL_REPLACED"
    EMBEDDING_STORED = "EMBEDDING_STORED"
    AUDITED = "AUDITED"
    COMMITTED = "COMMITTED"
    ABORTED = "ABORTED"


@dataclass(frozen=True)
class EnrollmentPolicy:
    """
    Read-only configuration for the enrollment transaction.

    Built once from Settings and injected at construction.
    """
    embedding_dims: int
    similarity_threshold: float
    liveness_threshold: float
    quality_threshold: float
    transaction_timeout_seconds: float = 10.0
    max_conflict_retries: int = 3

    @classmethod
    def from_settings(cls, settings: Settings) -> "EnrollmentPolicy":
        return cls(
            embedding_dims=settings.embedding_dims,
            similarity_threshold=settings.threshold_similarity,
            liveness_threshold=settings.threshold_liveness,
            quality_threshold=settings.threshold_quality,
            transaction_timeout_seconds=settings.enrollment_transaction_timeout_seconds,
            max_conflict_retries=settings.enrollment_max_conflict_retries,
        )


@dataclass
class _Attempt:
    """Mutable state of a single transactional attempt"""
    request: EnrollmentRequest
    actor_person_id: Optional[str]
    client_origin: Optional[str]
    stage: EnrollmentStage = EnrollmentStage.STARTED


class EnrollPersonUseCase:
    """
    Use case for the one-shot biometric enrollment.

    Resolves the person, refuses blocked persons, records consent, validates
    and normalizes the embedding, replaces the current credential, stores
    the vector and writes an audit entry, all inside one transaction.
    Any failure rolls everything back before the error reaches the caller.
    """

    def __init__(
        self,
        unit_of_work: UnitOfWork,
        person_repository: PersonRepository,
        block_repository: BlockRepository,
        consent_repository: ConsentRepository,
        enrollment_repository: EnrollmentRepository,
        audit_repository: AuditRepository,
        policy: EnrollmentPolicy,
    ) -> None:
        self.unit_of_work = unit_of_work
        self.person_repository = person_repository
        self.block_repository = block_repository
        self.consent_repository = consent_repository
        self.enrollment_repository = enrollment_repository
        self.audit_repository = audit_repository
        self.policy = policy

    async def execute(
        self,
        request: EnrollmentRequest,
        actor_person_id: Optional[str] = None,
        client_origin: Optional[str] = None,
    ) -> EnrollmentResponse:
        """
        Enroll a person

        Args:
            request: Validated enrollment request
            actor_person_id: Operator performing the enrollment, if known
            client_origin: Fallback consent origin (e.g. client IP)

        Returns:
            EnrollmentResponse with the new enrollment and configured thresholds

        Raises:
            EnrollmentError: The first failing step, in fixed step order.
                TransactionConflict is re-run from a fresh transaction up to
                policy.max_conflict_retries times before it is raised.
        """
        retries = 0
        while True:
            try:
                return await self._run_attempt(_Attempt(request, actor_person_id, client_origin))
            except TransactionConflict as e:
                if retries >= self.policy.max_conflict_retries:
                    raise
                retries += 1
                logger.warning(
                    f"Enrollment transaction conflict, retrying ({retries}/{self.policy.max_conflict_retries}): "
                    f"{e.message}"
                )

    async def _run_attempt(self, attempt: _Attempt) -> EnrollmentResponse:
        try:
            async with self.unit_of_work.begin() as session:
                try:
                    response, superseded = await asyncio.wait_for(
                        self._enroll(attempt, session),
                        timeout=self.policy.transaction_timeout_seconds,
                    )
                except asyncio.TimeoutError as e:
                    raise PersistenceError(
                        f"Enrollment exceeded {self.policy.transaction_timeout_seconds}s deadline",
                        {"stage": attempt.stage.value},
                    ) from e
        except EnrollmentError as e:
            logger.warning(
                f"Enrollment aborted after {attempt.stage.value} "
                f"[{e.error_code}] request_id={attempt.request.request_id}: {e.message}"
            )
            attempt.stage = EnrollmentStage.ABORTED
            raise

        attempt.stage = EnrollmentStage.COMMITTED
        logger.info(
            f"Enrollment {response.enrollment_id} committed for person {response.person_id} "
            f"(consent {'recorded' if response.consent_id else 'already on file'}, "
            f"superseded {superseded}) request_id={attempt.request.request_id}"
        )
        return response

    async def _enroll(self, attempt: _Attempt, session: TransactionHandle) -> Tuple[EnrollmentResponse, int]:
        request = attempt.request

        # Step 1: resolve person
        profile = PersonProfile(
            kind=request.person.kind,
            first_name=request.person.first_name,
            last_name=request.person.last_name,
            national_id=request.person.national_id,
            email=request.person.email,
            phone=request.person.phone,
        )
        person = await self.person_repository.resolve(profile, session)
        attempt.stage = EnrollmentStage.PERSON_RESOLVED

        # Step 2: blocked persons are refused before any other write
        if await self.block_repository.is_blocked(person.id, session):
            raise PersonBlocked("Person is blocked from enrollment", {"person_id": person.id})
        attempt.stage = EnrollmentStage.BLOCK_CHECKED

        # Step 3: consent
        if request.consent.accepted is not True:
            raise ConsentNotGiven(
                "Biometric consent must be accepted",
                {"policy_version": request.consent.policy_version},
            )
        consent = await self.consent_repository.ensure_recorded(
            person.id,
            request.consent.policy_version,
            request.consent.origin or attempt.client_origin,
            session,
        )
        attempt.stage = EnrollmentStage.CONSENT_RECORDED

        # Step 4: embedding and capture scores
        vector = self._validated_embedding(request)
        attempt.stage = EnrollmentStage.EMBEDDING_VALIDATED

        # Step 5: replace the current credential
        superseded = await self.enrollment_repository.supersede_current(person.id, session)
        enrollment = await self.enrollment_repository.create_current(
            person.id,
            request.source,
            request.liveness_score,
            request.quality_score,
            session,
        )
        attempt.stage = EnrollmentStage.CREDENTIAL_REPLACED

        # Step 6: store the normalized vector
        await self.enrollment_repository.attach_embedding(enrollment.id, vector, session)
        attempt.stage = EnrollmentStage.EMBEDDING_STORED

        # Step 7: audit
        await self.audit_repository.record(
            attempt.actor_person_id,
            AuditActions.ENROLLMENT_CREATED,
            AuditObjectTypes.ENROLLMENT,
            enrollment.id,
            self._audit_detail(request),
            session,
        )
        attempt.stage = EnrollmentStage.AUDITED

        response = EnrollmentResponse(
            person_id=person.id,
            consent_id=consent.id if consent is not None else None,
            enrollment_id=enrollment.id,
            state=EnrollmentState.CURRENT,
            thresholds=ThresholdsResponse(
                similarity=self.policy.similarity_threshold,
                liveness=self.policy.liveness_threshold,
                quality=self.policy.quality_threshold,
            ),
        )
        return response, superseded

    def _validated_embedding(self, request: EnrollmentRequest) -> List[float]:
        """
        Validate, normalize and gate the capture.

        Checks run in a fixed order so the reported error is deterministic:
        presence, declared width, values, norm, liveness, quality.
        """
        embedding = request.embedding
        if embedding is None:
            raise EmbeddingMissing("An embedding is required; server-side extraction is not available")

        expected = self.policy.embedding_dims
        if embedding.dims != expected:
            raise InvalidEmbeddingDimension(
                f"embedding.dims={embedding.dims} does not match configured width {expected}",
                {"expected": expected, "received": embedding.dims},
            )

        values = vector_validator.validate(embedding.values, expected)
        normalized = vector_validator.normalize(values)

        liveness = request.liveness_score
        if liveness is not None and liveness < self.policy.liveness_threshold:
            raise LivenessTooLow(
                f"Liveness score {liveness} is below {self.policy.liveness_threshold}",
                {"score": liveness, "threshold": self.policy.liveness_threshold},
            )

        quality = request.quality_score
        if quality is not None and quality < self.policy.quality_threshold:
            raise QualityTooLow(
                f"Quality score {quality} is below {self.policy.quality_threshold}",
                {"score": quality, "threshold": self.policy.quality_threshold},
            )

        return normalized

    def _audit_detail(self, request: EnrollmentRequest) -> Dict[str, Any]:
        return {
            "request_id": request.request_id,
            "branch_id": request.branch_id,
            "device_id": request.device_id,
            "liveness": request.liveness_score,
            "quality": request.quality_score,
            "source": request.source.value,
        }
