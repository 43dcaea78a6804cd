# Standard library imports
import os
from typing import Final, List, Optional


def _split_csv(raw: str) -> List[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


class Settings:
    """
    Application settings loaded from environment variables.

    This class centralizes all configuration settings for the application.
    All settings are loaded from environment variables with sensible defaults.
    Values are read once and treated as read-only afterwards.
    """

    def __init__(self) -> None:
        # Database Configuration
        self.mongo_uri: Final[str] = os.getenv("MONGO_URI", "mongodb://localhost:27017/?replicaSet=rs0")
        self.mongo_database_name: Final[str] = os.getenv("MONGO_DB_NAME", "biometric_enrollment")
        self.mongo_max_pool_size: Final[int] = int(os.getenv("MONGO_MAX_POOL_SIZE", "10"))
        self.mongo_min_pool_size: Final[int] = int(os.getenv("MONGO_MIN_POOL_SIZE", "0"))
        self.mongo_wait_queue_timeout_ms: Final[int] = int(
            os.getenv("MONGO_WAIT_QUEUE_TIMEOUT_MS", "10000")
        )
        self.mongo_server_selection_timeout_ms: Final[int] = int(
            os.getenv("MONGO_SERVER_SELECTION_TIMEOUT_MS", "10000")
        )

        # Biometric Configuration
        self.embedding_dims: Final[int] = int(os.getenv("EMBEDDING_DIMS", "512"))
        self.threshold_similarity: Final[float] = float(os.getenv("THRESHOLD_SIM", "0.9"))
        self.threshold_liveness: Final[float] = float(os.getenv("THRESHOLD_LIVENESS", "0.8"))
        self.threshold_quality: Final[float] = float(os.getenv("THRESHOLD_QUALITY", "0.85"))

        # Enrollment transaction
        self.enrollment_transaction_timeout_seconds: Final[float] = float(
            os.getenv("ENROLLMENT_TX_TIMEOUT_SECONDS", "10")
        )
        self.enrollment_max_conflict_retries: Final[int] = int(
            os.getenv("ENROLLMENT_MAX_CONFLICT_RETRIES", "3")
        )

        # JWT Configuration (operator tokens, optional on enrollment)
        self.jwt_secret_key: Final[str] = os.getenv("JWT_SECRET_KEY", "change_this_secret_in_production")
        self.jwt_algorithm: Final[str] = os.getenv("JWT_ALGORITHM", "HS256")

        # HTTP / logging
        self.cors_allow_origins: Final[List[str]] = _split_csv(
            os.getenv("CORS_ALLOW_ORIGINS", "http://localhost:4200,http://localhost:3000")
        )
        self.log_level: Final[str] = os.getenv("LOG_LEVEL", "INFO").upper()


# Global settings instance (singleton pattern)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get application settings (singleton pattern)

    Returns:
        Settings instance with all configuration values
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
