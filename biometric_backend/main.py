# Standard library imports
from pathlib import Path
from contextlib import asynccontextmanager
import logging

# External package imports
from dotenv import load_dotenv
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Local application imports
from .api.v1 import enrollment_router, health_router
from .core.config import get_settings
from .di.container import get_container, reset_container
from .domain.errors import InvalidRequestShape
from .infrastructure.db.mongo_connection import close_client
from .infrastructure.db.mongo_indexes import ensure_indexes

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup/shutdown events.

    Builds the DI container and ensures the indexes the enrollment
    transaction relies on; closes the MongoDB client on shutdown.
    """
    container = get_container()
    try:
        await ensure_indexes(container.get("database"))
    except Exception as e:
        logger.error(f"Failed to ensure MongoDB indexes: {e}", exc_info=True)
        raise

    logger.info("Application startup complete")

    yield

    close_client()
    reset_container()
    logger.info("Application shutdown complete")


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed bodies as InvalidRequestShape (400) instead of FastAPI's default 422."""
    error = InvalidRequestShape(
        "Invalid request payload",
        {"errors": jsonable_encoder(exc.errors())},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": error.to_dict()},
    )


def create_application() -> FastAPI:
    """
    Create and configure FastAPI application.

    This function sets up the FastAPI application with:
    - Environment variable loading
    - Logging configuration
    - CORS middleware configuration
    - API route registration

    Returns:
        Configured FastAPI application instance
    """
    # Load environment variables from .env file
    env_path = Path(__file__).resolve().parent.parent / ".env"
    load_dotenv(env_path)

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    application = FastAPI(
        title="Biometric Enrollment API",
        version="1.0.0",
        description="One-shot biometric enrollment backend",
        lifespan=lifespan
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.add_exception_handler(RequestValidationError, request_validation_error_handler)

    # Register API routers
    application.include_router(enrollment_router, prefix="/api/v1/enrollments")
    application.include_router(health_router, prefix="/api/v1/health")

    return application


# Create application instance
app = create_application()
