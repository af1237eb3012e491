# gallery/routers/auth.py
from typing import Any

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from gallery.core.auth import get_token_claims, require_auth
from gallery.database import get_session
from gallery.models.user import User
from gallery.repositories.user_repo import UserRepository
from gallery.schemas.common import APIResponse, ok
from gallery.schemas.user import LoginRequest, RegisterRequest, TokenRead, UserRead
from gallery.services.user_service import UserService

router = APIRouter(prefix="/auth", tags=["Auth"])

repo = UserRepository()
service = UserService(repo)


@router.post(
    "/register",
    response_model=APIResponse[UserRead],
    status_code=status.HTTP_201_CREATED,
)
def register(
    payload: RegisterRequest,
    session: Session = Depends(get_session),
):
    """
    Create a customer account (role USER).

    409 if the email or username is already taken.
    """
    user = service.register(session, payload)
    return ok(user, message="Registration successful")


@router.post("/login", response_model=APIResponse[TokenRead])
def login(
    payload: LoginRequest,
    session: Session = Depends(get_session),
):
    """
    Exchange email + password for a bearer token.
    """
    return ok(service.login(session, payload))


@router.post("/logout", response_model=APIResponse[None])
def logout(
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
    claims: dict[str, Any] = Depends(get_token_claims),
):
    """
    Revoke the presented token. Later requests with it get 401.
    """
    service.logout(session, current_user, claims)
    return ok(message="Logged out")
