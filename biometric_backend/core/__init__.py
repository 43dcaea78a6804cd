from .config import Settings, get_settings
from .security import (
    create_jwt_token,
    decode_jwt_token,
    actor_id_from_token,
)

__all__ = [
    "Settings",
    "get_settings",
    "create_jwt_token",
    "decode_jwt_token",
    "actor_id_from_token",
]
