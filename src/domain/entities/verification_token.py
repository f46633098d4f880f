from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Column, Field, SQLModel


class VerificationToken(SQLModel, table=True):
    """A persisted password reset token.

    Each row authorizes exactly one password change for the user named by
    ``identifier`` until ``expires``. The row is deleted when it is used or
    when it is found expired; a missing row always means "invalid". A user may
    hold several live rows at once, since issuing a token does not revoke the
    previous ones.

    Attributes:
        token: 64-character hex secret, primary key.
        identifier: Id of the owning user (not unique).
        expires: Expiry instant, timezone-aware UTC.
    """

    __tablename__ = "verification_tokens"

    token: str = Field(
        primary_key=True,
        max_length=64,  # 32 bytes hex encoded = 64 characters
        description="Opaque reset secret.",
    )
    identifier: str = Field(
        index=True,
        max_length=32,
        description="Id of the user the token belongs to.",
    )
    expires: datetime = Field(
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Instant after which the token no longer authorizes a reset.",
    )

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        """True once ``now`` is strictly past ``expires``."""
        current = now or datetime.now(timezone.utc)
        expires = self.expires
        if expires.tzinfo is None:
            # Some drivers hand back naive values for UTC columns.
            expires = expires.replace(tzinfo=timezone.utc)
        return current > expires
