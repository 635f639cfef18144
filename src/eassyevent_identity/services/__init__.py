"""Identity services - JWT, password hashing and one-time tokens."""

from eassyevent_identity.services.jwt_service import JWTService
from eassyevent_identity.services.one_time_token_service import (
    generate_token,
    hash_token,
    token_expiry,
)
from eassyevent_identity.services.password_service import PasswordHashingService

__all__ = [
    "JWTService",
    "PasswordHashingService",
    "generate_token",
    "hash_token",
    "token_expiry",
]
