"""Password hashing utility using Argon2.

Admin passwords are hashed with Argon2id before storage and never leave
the service layer in any form.
"""

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerifyMismatchError

_hasher = PasswordHasher()

# Verified against when the username is unknown, so a failed lookup costs
# the same as a failed password check.
DUMMY_PASSWORD_HASH = _hasher.hash("captive-portal-dummy-password")


def hash_password(password: str) -> str:
    """Hash a password using Argon2id.

    Example:
        >>> hashed = hash_password("S3cure-admin")
        >>> hashed.startswith("$argon2id$")
        True
    """
    return _hasher.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    """Verify a password against a stored hash in constant time.

    Args:
        password: The plaintext password to verify.
        hashed: The stored hash.

    Returns:
        True if the password matches, False otherwise (including a
        malformed stored hash).
    """
    try:
        _hasher.verify(hashed, password)
        return True
    except (VerifyMismatchError, InvalidHashError):
        return False


def needs_rehash(hashed: str) -> bool:
    """Check whether a hash was made with outdated parameters."""
    return _hasher.check_needs_rehash(hashed)
