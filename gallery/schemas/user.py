import uuid
from datetime import datetime
from typing import Literal

from pydantic import EmailStr, ConfigDict, Field, field_validator

from gallery.schemas.common import CamelModel

# App-level roles. Guests = no token, so they are not stored here.
Role = Literal["USER", "ADMIN"]

# bcrypt refuses secrets longer than this many bytes
PASSWORD_MAX_BYTES = 72


def fits_bcrypt(v: str) -> str:
    if len(v.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValueError(f"password must be at most {PASSWORD_MAX_BYTES} bytes")
    return v


class UserRead(CamelModel):
    """Response schema returned to clients (never includes the hash)."""

    id: uuid.UUID
    username: str
    email: EmailStr
    role: Role
    created_at: datetime


class RegisterRequest(CamelModel):
    """
    Payload for account registration.

    Validation rules:
      - username: 3-50 chars, no surrounding whitespace
      - email must be a valid EmailStr
      - password: at least 6 chars and at most 72 bytes in UTF-8 (bcrypt limit)
    """

    model_config = ConfigDict(extra="forbid")

    username: str = Field(min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(min_length=6, max_length=72)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        return fits_bcrypt(v)

    @field_validator("username")
    @classmethod
    def normalize_username(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 3:
            raise ValueError("username must be at least 3 characters")
        return v

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.lower()


class LoginRequest(CamelModel):
    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    password: str = Field(min_length=1, max_length=72)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        return fits_bcrypt(v)

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.lower()


class TokenRead(CamelModel):
    access_token: str
    token_type: str = "bearer"
    expires_at: datetime
    user: UserRead


class UserRoleUpdate(CamelModel):
    """
    Admin-only role update schema.
    """

    model_config = ConfigDict(extra="forbid")
    role: Role
