"""
Unit tests for EnrollPersonUseCase with mocked repositories.
"""
import asyncio
from contextlib import asynccontextmanager
from dataclasses import replace
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from biometric_backend.application.use_cases.enrollment.enroll_person import EnrollPersonUseCase
from biometric_backend.domain.errors import (
    ConsentNotGiven,
    EmbeddingMissing,
    InvalidEmbeddingDimension,
    InvalidEmbeddingValue,
    LivenessTooLow,
    PersistenceError,
    PersonBlocked,
    TransactionConflict,
    ZeroNormEmbedding,
)
from biometric_backend.domain.models import (
    CaptureSource,
    Consent,
    Enrollment,
    EnrollmentState,
    Person,
    PersonKind,
)
from biometric_backend.domain.repositories.unit_of_work import UnitOfWork
from tests.factories import EMBEDDING_DIMS, make_request

SESSION = object()


class RecordingUnitOfWork(UnitOfWork):
    """Yields a sentinel session and records how each transaction ended."""

    def __init__(self, fail_commits: int = 0) -> None:
        self.outcomes = []
        self.fail_commits = fail_commits

    @asynccontextmanager
    async def begin(self):
        try:
            yield SESSION
        except BaseException as e:
            self.outcomes.append(("rollback", type(e).__name__))
            raise
        if self.fail_commits:
            self.fail_commits -= 1
            self.outcomes.append(("conflict", None))
            raise TransactionConflict("Write conflict during commit")
        self.outcomes.append(("commit", None))


def _person() -> Person:
    return Person(id="per-1", kind=PersonKind.MEMBER, first_name="Ana", last_name="Rojas", national_id="11111111-1")


def _enrollment() -> Enrollment:
    return Enrollment(
        id="enr-1",
        person_id="per-1",
        state=EnrollmentState.CURRENT,
        source=CaptureSource.KIOSK,
        liveness_score=0.95,
        quality_score=0.9,
        created_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
    )


@pytest.fixture
def calls():
    return []


@pytest.fixture
def repos(calls):
    """Mock repositories that log the order in which they are called."""

    def logged(name, result):
        async def side_effect(*args, **kwargs):
            calls.append(name)
            return result
        return AsyncMock(side_effect=side_effect)

    person_repo = AsyncMock()
    person_repo.resolve = logged("resolve", _person())
    block_repo = AsyncMock()
    block_repo.is_blocked = logged("is_blocked", False)
    consent_repo = AsyncMock()
    consent_repo.ensure_recorded = logged(
        "ensure_recorded", Consent(id="con-1", person_id="per-1", policy_version="1.0")
    )
    enrollment_repo = AsyncMock()
    enrollment_repo.supersede_current = logged("supersede_current", 1)
    enrollment_repo.create_current = logged("create_current", _enrollment())
    enrollment_repo.attach_embedding = logged("attach_embedding", None)
    audit_repo = AsyncMock()
    audit_repo.record = logged("record", None)
    return {
        "person_repository": person_repo,
        "block_repository": block_repo,
        "consent_repository": consent_repo,
        "enrollment_repository": enrollment_repo,
        "audit_repository": audit_repo,
    }


@pytest.fixture
def uow():
    return RecordingUnitOfWork()


@pytest.fixture
def use_case(repos, uow, policy):
    return EnrollPersonUseCase(unit_of_work=uow, policy=policy, **repos)


class TestEnrollPersonUseCase:
    """Tests for the happy path"""

    @pytest.mark.asyncio
    async def test_steps_run_in_order_and_commit(self, use_case, calls, uow):
        result = await use_case.execute(make_request())

        assert calls == [
            "resolve",
            "is_blocked",
            "ensure_recorded",
            "supersede_current",
            "create_current",
            "attach_embedding",
            "record",
        ]
        assert uow.outcomes == [("commit", None)]
        assert result.person_id == "per-1"
        assert result.consent_id == "con-1"
        assert result.enrollment_id == "enr-1"
        assert result.state == EnrollmentState.CURRENT

    @pytest.mark.asyncio
    async def test_every_call_gets_the_transaction_handle(self, use_case, repos):
        await use_case.execute(make_request())

        assert repos["person_repository"].resolve.call_args.args[-1] is SESSION
        assert repos["block_repository"].is_blocked.call_args.args == ("per-1", SESSION)
        assert repos["consent_repository"].ensure_recorded.call_args.args == ("per-1", "1.0", "10.0.0.5", SESSION)
        assert repos["enrollment_repository"].supersede_current.call_args.args == ("per-1", SESSION)
        assert repos["audit_repository"].record.call_args.args[-1] is SESSION

    @pytest.mark.asyncio
    async def test_attached_vector_is_normalized(self, use_case, repos):
        values = [3.0, 4.0] + [0.0] * (EMBEDDING_DIMS - 2)
        await use_case.execute(make_request(embedding={"dims": EMBEDDING_DIMS, "values": values}))

        enrollment_id, vector, _ = repos["enrollment_repository"].attach_embedding.call_args.args
        assert enrollment_id == "enr-1"
        assert vector[:2] == pytest.approx([0.6, 0.8])
        assert len(vector) == EMBEDDING_DIMS

    @pytest.mark.asyncio
    async def test_create_current_uses_request_scores(self, use_case, repos):
        await use_case.execute(make_request(source="TABLET", liveness_score=0.91, quality_score=0.88))

        args = repos["enrollment_repository"].create_current.call_args.args
        assert args == ("per-1", CaptureSource.TABLET, 0.91, 0.88, SESSION)

    @pytest.mark.asyncio
    async def test_client_origin_used_when_consent_has_none(self, use_case, repos):
        request = make_request(consent={"policy_version": "1.0", "accepted": True})
        await use_case.execute(request, client_origin="192.168.1.20")

        assert repos["consent_repository"].ensure_recorded.call_args.args[2] == "192.168.1.20"

    @pytest.mark.asyncio
    async def test_existing_consent_gives_null_consent_id(self, use_case, repos):
        repos["consent_repository"].ensure_recorded.side_effect = None
        repos["consent_repository"].ensure_recorded.return_value = None

        result = await use_case.execute(make_request())
        assert result.consent_id is None


class TestEnrollPersonAborts:
    """Failures abort the transaction and surface the first error"""

    @pytest.mark.asyncio
    async def test_blocked_person_stops_before_consent(self, use_case, repos, calls, uow):
        repos["block_repository"].is_blocked.side_effect = None
        repos["block_repository"].is_blocked.return_value = True

        with pytest.raises(PersonBlocked):
            await use_case.execute(make_request())

        assert calls == ["resolve"]
        repos["consent_repository"].ensure_recorded.assert_not_called()
        repos["enrollment_repository"].create_current.assert_not_called()
        assert uow.outcomes == [("rollback", "PersonBlocked")]

    @pytest.mark.asyncio
    async def test_block_takes_precedence_over_missing_consent(self, use_case, repos):
        repos["block_repository"].is_blocked.side_effect = None
        repos["block_repository"].is_blocked.return_value = True
        request = make_request(consent={"policy_version": "1.0", "accepted": False}, embedding=None)

        with pytest.raises(PersonBlocked):
            await use_case.execute(request)

    @pytest.mark.asyncio
    async def test_consent_precedes_embedding_errors(self, use_case, calls):
        request = make_request(consent={"policy_version": "1.0", "accepted": False}, embedding=None)

        with pytest.raises(ConsentNotGiven):
            await use_case.execute(request)
        assert "ensure_recorded" not in calls

    @pytest.mark.asyncio
    async def test_missing_embedding(self, use_case, calls, uow):
        with pytest.raises(EmbeddingMissing):
            await use_case.execute(make_request(embedding=None))
        assert "supersede_current" not in calls
        assert uow.outcomes == [("rollback", "EmbeddingMissing")]

    @pytest.mark.asyncio
    async def test_dimension_checked_before_values(self, use_case):
        values = [float("nan")] * (EMBEDDING_DIMS - 1)
        with pytest.raises(InvalidEmbeddingDimension):
            await use_case.execute(make_request(embedding={"dims": EMBEDDING_DIMS - 1, "values": values}))

    @pytest.mark.asyncio
    async def test_non_finite_value(self, use_case):
        values = [1.0] * EMBEDDING_DIMS
        values[10] = float("inf")
        with pytest.raises(InvalidEmbeddingValue):
            await use_case.execute(make_request(embedding={"dims": EMBEDDING_DIMS, "values": values}))

    @pytest.mark.asyncio
    async def test_zero_norm_precedes_low_liveness(self, use_case):
        request = make_request(
            embedding={"dims": EMBEDDING_DIMS, "values": [0.0] * EMBEDDING_DIMS},
            liveness_score=0.1,
        )
        with pytest.raises(ZeroNormEmbedding):
            await use_case.execute(request)

    @pytest.mark.asyncio
    async def test_low_liveness_reports_threshold(self, use_case):
        with pytest.raises(LivenessTooLow) as exc_info:
            await use_case.execute(make_request(liveness_score=0.5, quality_score=0.1))
        assert exc_info.value.details == {"score": 0.5, "threshold": 0.8}

    @pytest.mark.asyncio
    async def test_audit_failure_aborts_transaction(self, use_case, repos, uow):
        repos["audit_repository"].record.side_effect = PersistenceError("Error writing audit entry")

        with pytest.raises(PersistenceError):
            await use_case.execute(make_request())
        assert uow.outcomes == [("rollback", "PersistenceError")]

    @pytest.mark.asyncio
    async def test_embedding_storage_failure_propagates(self, use_case, repos, uow):
        repos["enrollment_repository"].attach_embedding.side_effect = PersistenceError("Error storing embedding")

        with pytest.raises(PersistenceError, match="storing embedding"):
            await use_case.execute(make_request())
        repos["audit_repository"].record.assert_not_called()
        assert uow.outcomes == [("rollback", "PersistenceError")]

    @pytest.mark.asyncio
    async def test_deadline_rolls_back(self, repos, uow, policy):
        async def slow_resolve(*args, **kwargs):
            await asyncio.sleep(1)

        repos["person_repository"].resolve.side_effect = slow_resolve
        fast_policy = replace(policy, transaction_timeout_seconds=0.01)
        use_case = EnrollPersonUseCase(unit_of_work=uow, policy=fast_policy, **repos)

        with pytest.raises(PersistenceError, match="deadline"):
            await use_case.execute(make_request())
        assert uow.outcomes == [("rollback", "PersistenceError")]

    @pytest.mark.asyncio
    async def test_cancellation_rolls_back(self, repos, uow, policy):
        started = asyncio.Event()

        async def hanging_resolve(*args, **kwargs):
            started.set()
            await asyncio.sleep(10)

        repos["person_repository"].resolve.side_effect = hanging_resolve
        use_case = EnrollPersonUseCase(unit_of_work=uow, policy=policy, **repos)

        task = asyncio.create_task(use_case.execute(make_request()))
        await started.wait()
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        assert uow.outcomes == [("rollback", "CancelledError")]


class TestConflictRetry:
    """Transient conflicts re-run the whole unit of work"""

    @pytest.mark.asyncio
    async def test_conflict_then_success(self, repos, policy, calls):
        uow = RecordingUnitOfWork(fail_commits=1)
        use_case = EnrollPersonUseCase(unit_of_work=uow, policy=policy, **repos)

        result = await use_case.execute(make_request())

        assert result.enrollment_id == "enr-1"
        assert uow.outcomes == [("conflict", None), ("commit", None)]
        assert calls.count("resolve") == 2

    @pytest.mark.asyncio
    async def test_gives_up_after_max_retries(self, repos, policy):
        uow = RecordingUnitOfWork(fail_commits=10)
        use_case = EnrollPersonUseCase(unit_of_work=uow, policy=policy, **repos)

        with pytest.raises(TransactionConflict):
            await use_case.execute(make_request())
        assert len(uow.outcomes) == policy.max_conflict_retries + 1

    @pytest.mark.asyncio
    async def test_other_errors_are_not_retried(self, use_case, repos, uow):
        repos["person_repository"].resolve.side_effect = PersistenceError("boom")

        with pytest.raises(PersistenceError):
            await use_case.execute(make_request())
        assert len(uow.outcomes) == 1
