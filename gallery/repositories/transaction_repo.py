import uuid

from sqlmodel import Session, select

from gallery.models.transaction import Transaction


class TransactionRepository:
    """
    Data access layer for payment transactions.

    NOTE:
      - No commits here; reserving and settling a payment are
        multi-step transactions. The service calls session.commit().
    """

    def get_by_id(self, session: Session, transaction_id: str) -> Transaction | None:
        return session.get(Transaction, transaction_id)

    def list_for_user(
        self,
        session: Session,
        user_id: uuid.UUID,
        skip: int = 0,
        limit: int = 50,
    ) -> list[Transaction]:
        stmt = (
            select(Transaction)
            .where(Transaction.user_id == user_id)
            .order_by(Transaction.timestamp.desc())
            .offset(skip)
            .limit(limit)
        )
        return list(session.exec(stmt).all())

    def list_all(
        self,
        session: Session,
        skip: int = 0,
        limit: int = 50,
        status: str | None = None,
    ) -> list[Transaction]:
        stmt = select(Transaction)
        if status:
            stmt = stmt.where(Transaction.status == status)
        stmt = stmt.order_by(Transaction.timestamp.desc()).offset(skip).limit(limit)
        return list(session.exec(stmt).all())

    def add(self, session: Session, transaction: Transaction) -> Transaction:
        """
        Insert or update a Transaction without committing.
        """
        session.add(transaction)
        session.flush()
        return transaction
