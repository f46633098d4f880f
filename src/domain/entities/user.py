from datetime import datetime, timezone  # For timestamp fields
from typing import Optional  # For optional fields
from uuid import uuid4  # For opaque primary keys

from sqlalchemy import DateTime  # Explicit timezone-aware DateTime type
from sqlmodel import Column, Field, SQLModel, String  # For ORM and table definition


def utc_now() -> datetime:
    """Timezone-aware current time used for all persisted timestamps."""
    return datetime.now(timezone.utc)


class User(SQLModel, table=True):
    """Represents a User entity and acts as an Aggregate Root.

    This class models an account that authenticates with an email address and
    a password. Table models skip pydantic validation, so callers normalize
    the email (lower-case, stripped) before constructing or querying.

    Attributes:
        id: Opaque unique identifier (uuid4 hex).
        name: Display name, at least two characters.
        email: Unique, lower-cased email address used to log in.
        password: Bcrypt hash of the password. Never the plain text.
        image: Optional avatar URL.
        email_verified: When the address was verified, if ever.
        created_at: The timestamp of when the user account was created.
        updated_at: The timestamp of the last update to the user's record.
    """

    __tablename__ = "users"  # Explicit table name for clarity

    id: str = Field(
        default_factory=lambda: uuid4().hex,
        primary_key=True,
        max_length=32,
        description="The unique identifier for the user.",
    )
    name: str = Field(
        max_length=100,
        description="Display name of the user.",
    )
    email: str = Field(
        sa_column=Column(String, unique=True, index=True, nullable=False),  # Unique, indexed column
        description="Unique, lower-cased email address for login.",
    )
    password: str = Field(
        max_length=255,  # Sufficient for bcrypt hashes
        description="Bcrypt-hashed password.",
    )
    image: Optional[str] = Field(
        default=None,
        description="Optional avatar URL.",
    )
    email_verified: Optional[datetime] = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=True),
        description="When the email address was verified.",
    )
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="The timestamp of when the user account was created.",
    )
    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="The timestamp of the last update to the user's record.",
    )
