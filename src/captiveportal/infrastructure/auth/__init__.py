"""Authentication module.

Provides password hashing and JWT token handling.
"""

from captiveportal.infrastructure.auth.jwt_service import (
    BadSignatureError,
    InvalidTokenError,
    JWTError,
    JWTService,
    MalformedTokenError,
    TokenExpiredError,
)
from captiveportal.infrastructure.auth.password_hasher import (
    DUMMY_PASSWORD_HASH,
    hash_password,
    needs_rehash,
    verify_password,
)

__all__ = [
    "BadSignatureError",
    "DUMMY_PASSWORD_HASH",
    "InvalidTokenError",
    "JWTError",
    "JWTService",
    "MalformedTokenError",
    "TokenExpiredError",
    "hash_password",
    "needs_rehash",
    "verify_password",
]
