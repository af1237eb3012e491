import json
import logging
import time
import uuid
from datetime import datetime, timezone
from decimal import Decimal

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from gallery.core.payment_gateway import ChargeResult, PaymentGateway
from gallery.models.transaction import Transaction
from gallery.repositories.artwork_repo import ArtworkRepository
from gallery.repositories.transaction_repo import TransactionRepository
from gallery.schemas.payment import PaymentRequest, PaymentSuccessData

logger = logging.getLogger(__name__)


def generate_transaction_id() -> str:
    """TXN<epoch milliseconds><8 random hex digits>"""
    return f"TXN{int(time.time() * 1000)}{uuid.uuid4().hex[:8].upper()}"


class PaymentService:
    """
    Checkout against the mobile-payment gateway.

    Unit of work per attempt:
      1. reserve  - one DB transaction: lock the requested artworks,
                    check they are all available, compute the amount from
                    current prices, insert a `pending` Transaction and mark
                    the artworks unavailable. Committed before any charge.
      2. charge   - call the gateway.
      3. settle   - one DB transaction:
                      success -> `completed`
                      decline -> `failed` + artworks released

    A crash or DB error between charge and settle leaves a durable
    `pending` record with the artworks still reserved, so a charged
    payment is never left without a local record.
    """

    def __init__(
        self,
        transaction_repo: TransactionRepository,
        artwork_repo: ArtworkRepository,
    ):
        self.transaction_repo = transaction_repo
        self.artwork_repo = artwork_repo

    # -------- Checkout --------

    def simulate_payment(
        self,
        session: Session,
        user_id: uuid.UUID,
        payload: PaymentRequest,
        gateway: PaymentGateway,
    ) -> PaymentSuccessData:
        transaction = self._reserve(session, user_id, payload)
        reference = transaction.id

        try:
            result = gateway.charge(reference, transaction.phone_number, transaction.amount)
        except Exception:
            # outcome unknown, so the reservation stays pending for reconciliation
            logger.exception("Gateway charge failed for %s", reference)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Payment status unknown. Reference: {reference}",
            )
        logger.info(
            "Gateway %s for %s (%s)",
            "accepted" if result.success else "declined",
            reference,
            result.error_code or "ok",
        )

        try:
            transaction = self._settle(session, transaction, payload.artwork_ids, result)
        except SQLAlchemyError:
            session.rollback()
            logger.exception(
                "Settlement failed for %s; left pending for reconciliation", reference
            )
            if result.success:
                raise HTTPException(
                    status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                    detail=(
                        "Payment received but confirmation is still pending. "
                        f"Reference: {reference}"
                    ),
                )
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Payment was declined and could not be finalised. "
                f"Reference: {reference}",
            )

        if not result.success:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail={
                    "message": "Payment failed. Please try again.",
                    "error": result.error_code or "PAYMENT_DECLINED",
                },
            )

        return PaymentSuccessData(
            transaction_id=transaction.id,
            artwork_ids=payload.artwork_ids,
            status=transaction.status,
            amount=float(transaction.amount),
            phone_number=transaction.phone_number,
            timestamp=transaction.timestamp,
        )

    def _reserve(
        self,
        session: Session,
        user_id: uuid.UUID,
        payload: PaymentRequest,
    ) -> Transaction:
        """
        Steps:
          1. Lock available artworks among the requested ids.
          2. 404 (nothing written) if any is missing or already sold.
          3. Sum current prices.
          4. Insert Transaction(status='pending').
          5. Mark the artworks unavailable.
          6. Commit.
        """
        requested = payload.artwork_ids
        artworks = self.artwork_repo.list_available_for_update(session, requested)

        if len(artworks) != len(requested):
            found = {a.id for a in artworks}
            missing = [i for i in requested if i not in found]
            session.rollback()
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=(
                    "Some artworks not found or are unavailable: IDs "
                    + ", ".join(str(i) for i in missing)
                ),
            )

        amount = sum((Decimal(a.price) for a in artworks), Decimal("0"))

        transaction = Transaction(
            id=generate_transaction_id(),
            user_id=user_id,
            amount=amount,
            phone_number=payload.phone_number,
            status="pending",
            artwork_ids=json.dumps(requested),
        )
        self.transaction_repo.add(session, transaction)
        self.artwork_repo.set_availability(session, requested, False)

        session.commit()
        session.refresh(transaction)
        logger.info("Reserved artworks %s under %s (%s)", requested, transaction.id, amount)
        return transaction

    def _settle(
        self,
        session: Session,
        transaction: Transaction,
        artwork_ids: list[int],
        result: ChargeResult,
    ) -> Transaction:
        if result.success:
            transaction.status = "completed"
        else:
            transaction.status = "failed"
            self.artwork_repo.set_availability(session, artwork_ids, True)

        transaction.updated_at = datetime.now(timezone.utc)
        self.transaction_repo.add(session, transaction)
        session.commit()
        session.refresh(transaction)
        return transaction

    # -------- History --------

    def list_user_transactions(
        self,
        session: Session,
        user_id: uuid.UUID,
        skip: int = 0,
        limit: int = 50,
    ) -> list[Transaction]:
        return self.transaction_repo.list_for_user(session, user_id, skip, limit)

    def list_all_transactions(
        self,
        session: Session,
        skip: int = 0,
        limit: int = 50,
        status_filter: str | None = None,
    ) -> list[Transaction]:
        return self.transaction_repo.list_all(session, skip, limit, status_filter)

    def get_transaction(self, session: Session, transaction_id: str) -> Transaction:
        transaction = self.transaction_repo.get_by_id(session, transaction_id)
        if not transaction:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Transaction not found",
            )
        return transaction
