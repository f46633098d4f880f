"""Reset Token Value Object for secure token management.

This value object encapsulates how password reset secrets are generated and
what a well-formed one looks like.
"""

import re
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import ClassVar, Optional


@dataclass(frozen=True)
class ResetToken:
    """Password reset token value object.

    Tokens are 32 random bytes from :mod:`secrets`, hex encoded. The token is
    embedded verbatim in the reset link, so its randomness is the only thing
    protecting it; it is never signed or otherwise encoded.

    Attributes:
        value: The 64-character lowercase hex token
        expires_at: Token expiration timestamp (timezone-aware)
    """

    value: str
    expires_at: datetime

    TOKEN_BYTES: ClassVar[int] = 32
    TOKEN_PATTERN: ClassVar[re.Pattern] = re.compile(r"^[0-9a-f]{64}$")

    def __post_init__(self) -> None:
        """Validate token format on construction."""
        if not self.TOKEN_PATTERN.match(self.value):
            raise ValueError("Reset token must be 64 lowercase hex characters")
        if self.expires_at.tzinfo is None:
            raise ValueError("Token expiration must be timezone-aware")

    @classmethod
    def generate(cls, expiry_seconds: int, now: Optional[datetime] = None) -> "ResetToken":
        """Create a fresh token valid for ``expiry_seconds``.

        Args:
            expiry_seconds: Lifetime of the token.
            now: Issue time, defaults to the current UTC time.

        Returns:
            ResetToken: New token with its expiry instant.
        """
        issued_at = now or datetime.now(timezone.utc)
        return cls(
            value=secrets.token_hex(cls.TOKEN_BYTES),
            expires_at=issued_at + timedelta(seconds=expiry_seconds),
        )

    def mask(self) -> str:
        """Short form that is safe to log."""
        return f"{self.value[:8]}..."
