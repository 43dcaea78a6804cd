# External package imports
from fastapi import APIRouter, HTTPException, status
from pymongo.errors import PyMongoError

# Local application imports
from ...di.container import get_container


router = APIRouter(tags=["health"])


@router.get("/db")
async def health_db() -> dict:
    """
    Ping the database

    Returns:
        {"db": "ok"} when MongoDB answers

    Raises:
        HTTPException: 503 if the ping fails
    """
    database = get_container().get("database")
    try:
        await database.command("ping")
    except PyMongoError as exception:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"db error: {exception.__class__.__name__}: {exception}"
        )
    return {"db": "ok"}
