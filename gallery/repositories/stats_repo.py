from sqlalchemy import func
from sqlmodel import Session, select

from gallery.models.artwork import Artwork, Series
from gallery.models.transaction import Transaction
from gallery.models.user import User


class StatsRepository:
    """
    Read-only aggregated queries for admin dashboard.
    """

    def count_artworks(self, session: Session, is_available: bool | None = None) -> int:
        stmt = select(func.count()).select_from(Artwork)
        if is_available is not None:
            stmt = stmt.where(Artwork.is_available == is_available)
        # SQLModel's Session.exec() -> ScalarResult -> use .one()
        value = session.exec(stmt).one()
        return int(value or 0)

    def count_series(self, session: Session) -> int:
        value = session.exec(select(func.count()).select_from(Series)).one()
        return int(value or 0)

    def count_customers(self, session: Session) -> int:
        stmt = select(func.count()).select_from(User).where(User.role == "USER")
        value = session.exec(stmt).one()
        return int(value or 0)

    def count_completed_transactions(self, session: Session) -> int:
        stmt = (
            select(func.count())
            .select_from(Transaction)
            .where(Transaction.status == "completed")
        )
        value = session.exec(stmt).one()
        return int(value or 0)

    def total_revenue(self, session: Session) -> float:
        """
        Sum of amount for completed transactions.
        """
        stmt = select(func.coalesce(func.sum(Transaction.amount), 0)).where(
            Transaction.status == "completed"
        )
        value = session.exec(stmt).one()
        return float(value or 0.0)

    def latest_transactions(self, session: Session, limit: int = 5) -> list[Transaction]:
        """
        Latest N transactions by timestamp (any status).
        """
        stmt = select(Transaction).order_by(Transaction.timestamp.desc()).limit(limit)
        return list(session.exec(stmt).all())
