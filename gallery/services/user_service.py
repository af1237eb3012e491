import logging
import uuid
from datetime import datetime, timezone
from typing import Any

from fastapi import HTTPException, status
from sqlmodel import Session

from gallery.core.auth import USER_ROLE, create_access_token
from gallery.core.security import hash_password, verify_password
from gallery.models.user import RevokedToken, User
from gallery.repositories.user_repo import UserRepository
from gallery.schemas.user import (
    LoginRequest,
    RegisterRequest,
    TokenRead,
    UserRead,
    UserRoleUpdate,
)

logger = logging.getLogger(__name__)


class UserService:
    """
    Business logic for User.

    Responsibilities:
      - registration (unique email / username, password hashing)
      - credential login and token issue
      - logout (token revocation)
      - admin role management
    """

    def __init__(self, repo: UserRepository):
        self.repo = repo

    # ----- Credentials -----

    def register(self, session: Session, payload: RegisterRequest) -> User:
        """
        Create a USER-role account.

        Raises:
            HTTPException(409): if email or username is already taken.
        """
        if self.repo.get_by_email(session, payload.email) is not None:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="User with this email already exists",
            )
        if self.repo.get_by_username(session, payload.username) is not None:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Username already taken",
            )

        user = User(
            username=payload.username,
            email=payload.email,
            password_hash=hash_password(payload.password),
            role=USER_ROLE,
        )
        user = self.repo.create(session, user)
        logger.info("Registered user %s", user.id)
        return user

    def login(self, session: Session, payload: LoginRequest) -> TokenRead:
        """
        Verify credentials and issue an access token.

        Raises:
            HTTPException(401): unknown email or wrong password (same message).
        """
        user = self.repo.get_by_email(session, payload.email)
        if user is None or not verify_password(payload.password, user.password_hash):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid credentials",
            )

        token, expires_at = create_access_token(user)
        return TokenRead(
            access_token=token,
            expires_at=expires_at,
            user=UserRead.model_validate(user),
        )

    def logout(self, session: Session, user: User, claims: dict[str, Any]) -> None:
        """Revoke the presented token until its natural expiry."""
        purged = self.repo.purge_expired_tokens(session, datetime.now(timezone.utc))
        if purged:
            logger.info("Purged %d expired token revocations", purged)

        expires_at = datetime.fromtimestamp(int(claims["exp"]), tz=timezone.utc)
        self.repo.revoke_token(
            session,
            RevokedToken(jti=claims["jti"], user_id=user.id, expires_at=expires_at),
        )

    # ----- Admin operations -----

    def list_users(self, session: Session, skip: int, limit: int) -> list[User]:
        """List users with pagination (admin only)."""
        return self.repo.list(session, skip=skip, limit=limit)

    def get_user(self, session: Session, user_id: uuid.UUID) -> User:
        """
        Get a user by id (admin only).

        Raises:
            HTTPException(404): if not found.
        """
        user = self.repo.get_by_id(session, user_id)
        if not user:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User not found",
            )
        return user

    def update_role(
        self,
        session: Session,
        user_id: uuid.UUID,
        payload: UserRoleUpdate,
    ) -> User:
        """
        Change user's role (admin only).

        Role validation is enforced by the schema (Literal).
        """
        user = self.get_user(session, user_id)
        user.role = payload.role
        user.updated_at = datetime.now(timezone.utc)
        return self.repo.update(session, user)
