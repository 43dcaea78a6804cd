# Standard library imports
from typing import Optional

# External package imports
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

# Local application imports
from ...core.security import actor_id_from_token


optional_security_scheme = HTTPBearer(auto_error=False)


async def get_actor_person_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_security_scheme),
) -> Optional[str]:
    """
    FastAPI dependency resolving the operator behind a request

    Enrollment kiosks may call without a token; the audit actor is then None.

    Args:
        credentials: HTTP Bearer token credentials, if sent

    Returns:
        The operator's person ID, or None for anonymous requests

    Raises:
        HTTPException: If a token was sent but is invalid
    """
    if credentials is None:
        return None

    try:
        return actor_id_from_token(credentials.credentials)
    except ValueError as exception:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exception)
        )
