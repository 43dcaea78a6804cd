# Standard library imports
import time
from typing import Any, Dict, Optional

# External package imports
import jwt
from jwt.exceptions import InvalidTokenError, DecodeError

# Local application imports
from .config import get_settings


def create_jwt_token(payload: Dict[str, Any], expires_in_minutes: int = 60) -> str:
    """
    Create a JWT token with expiration

    Operator tokens are normally issued by the staff auth service; this is
    used by tooling and tests that need a token signed with the shared key.

    Args:
        payload: Dictionary containing token claims (e.g., sub)
        expires_in_minutes: Lifetime of the token

    Returns:
        Encoded JWT token string
    """
    settings = get_settings()
    issued_at = int(time.time())
    expires_at = issued_at + (expires_in_minutes * 60)

    token_payload = {
        **payload,
        "iat": issued_at,
        "exp": expires_at,
    }

    return jwt.encode(
        token_payload,
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm
    )


def decode_jwt_token(token: str) -> Dict[str, Any]:
    """
    Decode and validate a JWT token

    Args:
        token: The JWT token string to decode

    Returns:
        Dictionary containing decoded token claims

    Raises:
        ValueError: If token is invalid, expired or cannot be decoded
    """
    settings = get_settings()
    try:
        decoded = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm]
        )
        return decoded
    except (InvalidTokenError, DecodeError) as e:
        raise ValueError(f"Invalid token: {str(e)}")


def actor_id_from_token(token: Optional[str]) -> Optional[str]:
    """Return the `sub` claim of an operator token, or None when no token was sent."""
    if not token:
        return None
    claims = decode_jwt_token(token)
    subject = claims.get("sub")
    if not subject:
        raise ValueError("Invalid token: missing subject")
    return str(subject)
