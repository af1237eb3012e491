# gallery/routers/payment.py
from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from gallery.core.auth import require_auth
from gallery.core.payment_gateway import PaymentGateway, get_payment_gateway
from gallery.database import get_session
from gallery.models.user import User
from gallery.repositories.artwork_repo import ArtworkRepository
from gallery.repositories.transaction_repo import TransactionRepository
from gallery.schemas.common import APIResponse, ok
from gallery.schemas.payment import PaymentRequest, PaymentSuccessData, TransactionRead
from gallery.services.payment_service import PaymentService

router = APIRouter(prefix="/payment", tags=["Payment"])

transaction_repo = TransactionRepository()
artwork_repo = ArtworkRepository()
service = PaymentService(transaction_repo, artwork_repo)


@router.post("/simulate", response_model=APIResponse[PaymentSuccessData])
def simulate_payment(
    payload: PaymentRequest,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
    gateway: PaymentGateway = Depends(get_payment_gateway),
):
    """
    Pay for the artworks in the cart via a simulated STK push.

    Behaviour:
      - Reserves the artworks (404 if any is missing or already sold).
      - The amount comes from current database prices, never the client.
      - On success the artworks stay sold and the transaction is `completed`.
      - On decline the artworks are released, the transaction is `failed`
        and the response is 400 with an `error` code.

    Auth:
      - Requires authenticated user.
    """
    data = service.simulate_payment(session, current_user.id, payload, gateway)
    return ok(data, message="Payment successful")


@router.get("/transactions", response_model=APIResponse[list[TransactionRead]])
def list_my_transactions(
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=200),
):
    """
    The caller's transactions, newest first.
    """
    transactions = service.list_user_transactions(session, current_user.id, skip, limit)
    return ok(transactions, total=len(transactions))
