"""JWT token service.

Mints and verifies the bearer tokens handed to guests and admins. Tokens
are not stored server-side; expiry is the only way one stops working.
"""

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt


class JWTError(Exception):
    """Base exception for JWT-related errors."""

    pass


class TokenExpiredError(JWTError):
    """Raised when a token has expired."""

    pass


class InvalidTokenError(JWTError):
    """Raised when a token is invalid."""

    pass


class MalformedTokenError(InvalidTokenError):
    """Raised when a token cannot be parsed or lacks required claims."""

    pass


class BadSignatureError(InvalidTokenError):
    """Raised when a token signature does not verify."""

    pass


class JWTService:
    """Service for creating and validating JWT tokens.

    One instance is built from settings at application startup and kept on
    the application state.
    """

    ALGORITHM = "HS256"
    ISSUER = "captive-portal"
    USER_TOKEN = "user"
    ADMIN_TOKEN = "admin"

    def __init__(self, secret_key: str, expire_hours: int = 24) -> None:
        """Initialize the JWT service.

        Args:
            secret_key: Secret key for signing tokens.
            expire_hours: Default token lifetime in hours.
        """
        if not secret_key:
            raise ValueError("secret_key must not be empty")
        self.secret_key = secret_key
        self.expire_hours = expire_hours

    @property
    def default_expires_delta(self) -> timedelta:
        return timedelta(hours=self.expire_hours)

    def _encode(
        self,
        subject: str,
        claims: dict[str, Any],
        expires_delta: timedelta | None,
    ) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "iss": self.ISSUER,
            "sub": subject,
            "iat": now,
            "exp": now + (expires_delta or self.default_expires_delta),
            **claims,
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.ALGORITHM)

    def create_user_token(
        self,
        user_id: str,
        email: str,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Create a token for a registered guest.

        Args:
            user_id: The user's unique identifier.
            email: The user's email address.
            expires_delta: Custom lifetime. Defaults to ``expire_hours``.

        Returns:
            Encoded JWT.
        """
        return self._encode(
            user_id,
            {"user_id": user_id, "email": email, "type": self.USER_TOKEN},
            expires_delta,
        )

    def create_admin_token(
        self,
        admin_id: str,
        username: str,
        role: str,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Create a token for an admin.

        Args:
            admin_id: The admin's unique identifier.
            username: The admin's login name.
            role: The admin's role.
            expires_delta: Custom lifetime. Defaults to ``expire_hours``.

        Returns:
            Encoded JWT.
        """
        return self._encode(
            admin_id,
            {
                "admin_id": admin_id,
                "username": username,
                "role": role,
                "type": self.ADMIN_TOKEN,
            },
            expires_delta,
        )

    def decode_token(self, token: str) -> dict[str, Any]:
        """Decode and validate a JWT token.

        Args:
            token: The encoded JWT token.

        Returns:
            Decoded token payload.

        Raises:
            TokenExpiredError: If the token has expired.
            BadSignatureError: If the signature does not verify.
            MalformedTokenError: If the token cannot be decoded.
        """
        try:
            return jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.ALGORITHM],
                issuer=self.ISSUER,
                options={"require": ["exp", "iat", "sub"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError("Token has expired") from e
        except jwt.InvalidSignatureError as e:
            raise BadSignatureError("Invalid token signature") from e
        except jwt.InvalidTokenError as e:
            raise MalformedTokenError("Invalid token") from e

    def _validate_type(self, token: str, token_type: str, id_claim: str) -> dict[str, Any]:
        payload = self.decode_token(token)
        if payload.get("type") != token_type:
            raise InvalidTokenError(f"Not a {token_type} token")
        if not payload.get(id_claim):
            raise MalformedTokenError(f"Token is missing the {id_claim} claim")
        return payload

    def validate_user_token(self, token: str) -> dict[str, Any]:
        """Decode a token and require it to be a guest token.

        Raises:
            TokenExpiredError: If the token has expired.
            InvalidTokenError: If the token is invalid or not a user token.
        """
        return self._validate_type(token, self.USER_TOKEN, "user_id")

    def validate_admin_token(self, token: str) -> dict[str, Any]:
        """Decode a token and require it to be an admin token.

        Raises:
            TokenExpiredError: If the token has expired.
            InvalidTokenError: If the token is invalid or not an admin token.
        """
        return self._validate_type(token, self.ADMIN_TOKEN, "admin_id")
