"""
Integration tests for the enrollment and health API endpoints.
Uses TestClient with a mocked container (no real DB).
Note: Runs full app lifespan (slower). Use: pytest tests/unit/ for fast unit-only runs.
"""
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

pytestmark = pytest.mark.integration
from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

from biometric_backend.application.dto.enrollment_dto import EnrollmentResponse, ThresholdsResponse
from biometric_backend.application.use_cases.enrollment.enroll_person import EnrollPersonUseCase
from biometric_backend.core.security import create_jwt_token
from biometric_backend.domain.errors import (
    ConsentNotGiven,
    InvalidEmbeddingDimension,
    LivenessTooLow,
    PersistenceError,
    PersonBlocked,
    QualityTooLow,
    TransactionConflict,
    ZeroNormEmbedding,
)
from tests.factories import make_payload

ENDPOINT = "/api/v1/enrollments/one-shot"


@pytest.fixture
def mock_enroll_use_case():
    uc = AsyncMock(spec=EnrollPersonUseCase)
    uc.execute.return_value = EnrollmentResponse(
        person_id="665f1c2e9b1e8a3d4c5b6a70",
        consent_id="665f1c2e9b1e8a3d4c5b6a71",
        enrollment_id="665f1c2e9b1e8a3d4c5b6a72",
        thresholds=ThresholdsResponse(similarity=0.9, liveness=0.8, quality=0.85),
    )
    return uc


@pytest.fixture
def mock_database():
    database = MagicMock()
    database.command = AsyncMock(return_value={"ok": 1})
    return database


@pytest.fixture
def mock_container(mock_enroll_use_case, mock_database):
    container = MagicMock()
    container.get.side_effect = lambda key: {
        EnrollPersonUseCase: mock_enroll_use_case,
        "database": mock_database,
    }.get(key, None)
    return container


@pytest.fixture
def client(mock_container):
    """Create test client with mocked container and index bootstrap."""
    from biometric_backend.main import app

    with patch("biometric_backend.main.get_container", return_value=mock_container), patch(
        "biometric_backend.main.ensure_indexes", new_callable=AsyncMock
    ), patch(
        "biometric_backend.api.v1.enrollment_controller.get_container", return_value=mock_container
    ), patch(
        "biometric_backend.api.v1.health_controller.get_container", return_value=mock_container
    ):
        with TestClient(app) as c:
            yield c


class TestEnrollmentAPI:
    """Tests for POST /api/v1/enrollments/one-shot"""

    def test_enroll_success(self, client, mock_enroll_use_case):
        response = client.post(ENDPOINT, json=make_payload())

        assert response.status_code == 201
        data = response.json()
        assert data["state"] == "CURRENT"
        assert data["enrollment_id"] == "665f1c2e9b1e8a3d4c5b6a72"
        assert data["thresholds"]["liveness"] == 0.8

        call = mock_enroll_use_case.execute.await_args
        request = call.args[0]
        assert request.person.national_id == "11111111-1"
        assert call.kwargs["actor_person_id"] is None
        assert call.kwargs["client_origin"] == "testclient"

    def test_camel_case_body_is_accepted(self, client, mock_enroll_use_case):
        payload = make_payload()
        payload["branchId"] = payload.pop("branch_id")
        payload["livenessScore"] = payload.pop("liveness_score")
        payload["qualityScore"] = payload.pop("quality_score")

        response = client.post(ENDPOINT, json=payload)

        assert response.status_code == 201
        request = mock_enroll_use_case.execute.await_args.args[0]
        assert request.branch_id == 3
        assert request.liveness_score == 0.95

    @pytest.mark.parametrize(
        "error, expected_status, expected_code",
        [
            (PersonBlocked("Person is blocked"), 423, "PERSON_BLOCKED"),
            (ConsentNotGiven("Consent not given"), 403, "CONSENT_NOT_GIVEN"),
            (InvalidEmbeddingDimension("bad dims", {"expected": 512, "received": 511}), 422,
             "INVALID_EMBEDDING_DIMENSION"),
            (ZeroNormEmbedding("zero norm"), 422, "ZERO_NORM_EMBEDDING"),
            (LivenessTooLow("Liveness too low", {"score": 0.79, "threshold": 0.8}), 412, "LIVENESS_TOO_LOW"),
            (QualityTooLow("Quality too low"), 412, "QUALITY_TOO_LOW"),
            (PersistenceError("db down"), 503, "PERSISTENCE_ERROR"),
            (TransactionConflict("write conflict"), 503, "TRANSACTION_CONFLICT"),
        ],
    )
    def test_error_mapping(self, client, mock_enroll_use_case, error, expected_status, expected_code):
        mock_enroll_use_case.execute.side_effect = error

        response = client.post(ENDPOINT, json=make_payload())

        assert response.status_code == expected_status
        detail = response.json()["detail"]
        assert detail["error"] == expected_code
        assert detail["message"] == error.message
        assert detail["details"] == error.details

    def test_malformed_body_returns_400(self, client, mock_enroll_use_case):
        response = client.post(ENDPOINT, json={"person": {"kind": "MEMBER"}, "source": "KIOSK"})

        assert response.status_code == 400
        detail = response.json()["detail"]
        assert detail["error"] == "INVALID_REQUEST_SHAPE"
        assert detail["details"]["errors"]
        mock_enroll_use_case.execute.assert_not_awaited()

    def test_score_out_of_range_returns_400(self, client, mock_enroll_use_case):
        response = client.post(ENDPOINT, json=make_payload(liveness_score=1.2))

        assert response.status_code == 400
        mock_enroll_use_case.execute.assert_not_awaited()

    @pytest.mark.parametrize("flag", ["yes", "true", 1])
    def test_non_boolean_consent_returns_400(self, client, mock_enroll_use_case, flag):
        payload = make_payload(consent={"policy_version": "1.0", "accepted": flag, "origin": "10.0.0.5"})

        response = client.post(ENDPOINT, json=payload)

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "INVALID_REQUEST_SHAPE"
        mock_enroll_use_case.execute.assert_not_awaited()

    @pytest.mark.parametrize("element", [True, "0.5"])
    def test_non_numeric_embedding_value_returns_400(self, client, mock_enroll_use_case, element):
        payload = make_payload()
        payload["embedding"]["values"][0] = element

        response = client.post(ENDPOINT, json=payload)

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "INVALID_REQUEST_SHAPE"
        mock_enroll_use_case.execute.assert_not_awaited()

    def test_operator_token_sets_actor(self, client, mock_enroll_use_case, mock_settings):
        token = create_jwt_token({"sub": "operator-42"})

        response = client.post(ENDPOINT, json=make_payload(), headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 201
        assert mock_enroll_use_case.execute.await_args.kwargs["actor_person_id"] == "operator-42"

    def test_invalid_token_returns_401(self, client, mock_enroll_use_case, mock_settings):
        response = client.post(
            ENDPOINT, json=make_payload(), headers={"Authorization": "Bearer invalid.jwt.token"}
        )

        assert response.status_code == 401
        mock_enroll_use_case.execute.assert_not_awaited()


class TestHealthAPI:
    """Tests for GET /api/v1/health/db"""

    def test_db_ok(self, client, mock_database):
        response = client.get("/api/v1/health/db")

        assert response.status_code == 200
        assert response.json() == {"db": "ok"}
        mock_database.command.assert_awaited_once_with("ping")

    def test_db_unreachable(self, client, mock_database):
        mock_database.command.side_effect = ServerSelectionTimeoutError("no servers")

        response = client.get("/api/v1/health/db")

        assert response.status_code == 503
        assert "ServerSelectionTimeoutError" in response.json()["detail"]
