from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from gallery.core.auth import require_admin
from gallery.database import get_session
from gallery.repositories.artwork_repo import ArtworkRepository
from gallery.repositories.transaction_repo import TransactionRepository
from gallery.schemas.common import APIResponse, ok
from gallery.schemas.payment import TransactionRead, TransactionStatus
from gallery.services.payment_service import PaymentService

router = APIRouter(
    prefix="/admin/transactions",
    tags=["Admin Transactions"],
    dependencies=[Depends(require_admin)],
)

transaction_repo = TransactionRepository()
artwork_repo = ArtworkRepository()
service = PaymentService(transaction_repo, artwork_repo)


@router.get("", response_model=APIResponse[list[TransactionRead]])
def list_transactions(
    session: Session = Depends(get_session),
    status: TransactionStatus | None = None,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=200),
):
    """
    All transactions, newest first (admin only).

    `status` narrows to pending / completed / failed; pending rows older
    than a few minutes need reconciling against the gateway.
    """
    transactions = service.list_all_transactions(session, skip, limit, status)
    return ok(transactions, total=len(transactions))


@router.get("/{transaction_id}", response_model=APIResponse[TransactionRead])
def get_transaction(
    transaction_id: str,
    session: Session = Depends(get_session),
):
    return ok(service.get_transaction(session, transaction_id))
