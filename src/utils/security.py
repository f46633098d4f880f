"""Security utilities for password hashing.

Passwords are hashed with bcrypt through passlib. The work factor comes from
``BCRYPT_WORK_FACTOR`` so test suites can lower it.
"""

from passlib.context import CryptContext

from src.core.config.settings import settings

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_WORK_FACTOR,
)


def hash_password(password: str) -> str:
    """Hash a password using bcrypt.

    Args:
        password: Plain text password to hash

    Returns:
        str: Bcrypt-hashed password
    """
    return pwd_context.hash(password)


def verify_password(password: str, hashed_password: str) -> bool:
    """Verify a password against its hash.

    Args:
        password: Plain text password to verify
        hashed_password: Bcrypt hash to verify against

    Returns:
        bool: True if password matches hash. Malformed hashes count as a
        mismatch rather than an error.

    Security:
        - Uses constant-time comparison via bcrypt
    """
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(password, hashed_password)
    except ValueError:
        return False


# Compared against when no account matches, so unknown emails cost a bcrypt round too.
DUMMY_PASSWORD_HASH = pwd_context.hash("authgate-unknown-account")
