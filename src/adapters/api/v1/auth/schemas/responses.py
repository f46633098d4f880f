from __future__ import annotations

"""Response Pydantic models for authentication endpoints.

Field names follow the JSON contract (``createdAt``, ``emailVerified``)
through serialization aliases.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from src.domain.entities.user import User


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str


class RegisteredUserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    created_at: datetime = Field(serialization_alias="createdAt")


class AuthenticatedUserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    image: Optional[str] = None
    email_verified: Optional[datetime] = Field(default=None, serialization_alias="emailVerified")


class RegisterResponse(MessageResponse):
    """Response returned by ``POST /auth/register``."""

    user: RegisteredUserOut

    @classmethod
    def for_user(cls, user: User) -> "RegisterResponse":
        return cls(
            message="User registered successfully",
            user=RegisteredUserOut.model_validate(user),
        )


class LoginResponse(MessageResponse):
    """Response returned by ``POST /auth/login``."""

    user: AuthenticatedUserOut

    @classmethod
    def for_user(cls, user: User) -> "LoginResponse":
        return cls(
            message="Credentials validated successfully",
            user=AuthenticatedUserOut.model_validate(user),
        )
