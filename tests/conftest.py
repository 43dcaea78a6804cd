"""
Shared pytest fixtures for biometric backend tests.
"""
import os
from unittest.mock import MagicMock, patch

import pytest

from biometric_backend.application.use_cases.enrollment.enroll_person import EnrollmentPolicy
from tests.factories import EMBEDDING_DIMS
from tests.fakes import InMemoryStore, build_use_case


@pytest.fixture
def mock_env():
    """Fixture to set common test environment variables."""
    env_vars = {
        "MONGO_URI": "mongodb://localhost:27017/?replicaSet=rs0",
        "MONGO_DB_NAME": "test_biometric_db",
        "JWT_SECRET_KEY": "test_secret_key_for_testing_only",
        "EMBEDDING_DIMS": str(EMBEDDING_DIMS),
    }
    with patch.dict(os.environ, env_vars, clear=False):
        yield env_vars


@pytest.fixture
def mock_settings():
    """Fixture to mock get_settings for tests. Patches all modules that use it."""
    mock = MagicMock()
    mock.mongo_uri = "mongodb://localhost:27017/?replicaSet=rs0"
    mock.mongo_database_name = "test_db"
    mock.jwt_secret_key = "test_jwt_secret"
    mock.jwt_algorithm = "HS256"
    mock.embedding_dims = EMBEDDING_DIMS
    mock.threshold_similarity = 0.9
    mock.threshold_liveness = 0.8
    mock.threshold_quality = 0.85
    mock.enrollment_transaction_timeout_seconds = 10.0
    mock.enrollment_max_conflict_retries = 3

    # Patch at source and at use sites (modules import get_settings at load time)
    with patch("biometric_backend.core.config.get_settings", return_value=mock), patch(
        "biometric_backend.core.security.get_settings", return_value=mock
    ):
        yield mock


@pytest.fixture
def policy() -> EnrollmentPolicy:
    """Thresholds used throughout the scenarios: liveness 0.8, quality 0.85."""
    return EnrollmentPolicy(
        embedding_dims=EMBEDDING_DIMS,
        similarity_threshold=0.9,
        liveness_threshold=0.8,
        quality_threshold=0.85,
        transaction_timeout_seconds=5.0,
        max_conflict_retries=3,
    )


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def use_case(store, policy):
    """EnrollPersonUseCase wired to the in-memory transactional store."""
    return build_use_case(store, policy)
