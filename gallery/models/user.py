import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class User(SQLModel, table=True):
    """
    Registered gallery account.

    Role:
      - "USER" | "ADMIN"
      - guests are represented by the absence of a token.

    Only the bcrypt hash of the password is stored.
    """

    __tablename__ = "users"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    username: str = Field(
        max_length=50,
        unique=True,
        index=True,
        description="Public handle chosen at registration",
    )

    email: str = Field(
        unique=True,
        index=True,
        description="Login identifier",
    )

    password_hash: str = Field(
        description="bcrypt hash of the password",
    )

    # Application role
    role: str = Field(
        default="USER",
        index=True,
        description="Application role: USER | ADMIN",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Last update timestamp (UTC)",
    )


class RevokedToken(SQLModel, table=True):
    """
    Access tokens invalidated by logout before their natural expiry.
    """

    __tablename__ = "revoked_tokens"

    jti: str = Field(
        primary_key=True,
        description="JWT id claim of the revoked token",
    )

    user_id: uuid.UUID = Field(
        foreign_key="users.id",
        index=True,
    )

    expires_at: datetime = Field(
        description="Token expiry; rows past this point can be purged",
    )
