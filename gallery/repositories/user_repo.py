import uuid
from datetime import datetime

from sqlalchemy import delete
from sqlmodel import Session, select

from gallery.models.user import RevokedToken, User


class UserRepository:
    """
    Data access layer for User.

    Responsibilities:
      - Pure DB operations (CRUD + queries)
      - No FastAPI, no HTTP, no business logic
    """

    # ----- Basic CRUD -----

    def get_by_id(self, session: Session, user_id: uuid.UUID) -> User | None:
        """Return a User by primary key, or None if not found."""
        return session.get(User, user_id)

    def get_by_email(self, session: Session, email: str) -> User | None:
        """Return a User by unique email, or None if not found."""
        stmt = select(User).where(User.email == email)
        return session.exec(stmt).first()

    def get_by_username(self, session: Session, username: str) -> User | None:
        stmt = select(User).where(User.username == username)
        return session.exec(stmt).first()

    def list(self, session: Session, skip: int = 0, limit: int = 50) -> list[User]:
        """
        Paginated user listing.

        Args:
            skip: offset rows (for paging)
            limit: max number of rows returned
        """
        stmt = select(User).order_by(User.created_at).offset(skip).limit(limit)
        return list(session.exec(stmt).all())

    def create(self, session: Session, user: User) -> User:
        """Insert a new User and return the persisted row."""
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    def update(self, session: Session, user: User) -> User:
        """Persist changes to an existing User."""
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    # ----- Token revocation -----

    def revoke_token(self, session: Session, token: RevokedToken) -> None:
        """Blacklist a token id. Revoking twice is a no-op."""
        if session.get(RevokedToken, token.jti) is None:
            session.add(token)
            session.commit()

    def purge_expired_tokens(self, session: Session, now: datetime) -> int:
        """
        Drop revocation rows whose token has expired anyway.

        Returns:
            number of rows deleted
        """
        stmt = (
            delete(RevokedToken)
            .where(RevokedToken.expires_at < now)
            .execution_options(synchronize_session=False)
        )
        result = session.exec(stmt)
        session.commit()
        return result.rowcount or 0
