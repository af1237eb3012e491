import uuid

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from gallery.core.auth import require_admin
from gallery.database import get_session
from gallery.repositories.user_repo import UserRepository
from gallery.schemas.common import APIResponse, ok
from gallery.schemas.user import UserRead, UserRoleUpdate
from gallery.services.user_service import UserService

router = APIRouter(
    prefix="/admin/users",
    tags=["Admin Users"],
    dependencies=[Depends(require_admin)],
)

repo = UserRepository()
service = UserService(repo)


@router.get("", response_model=APIResponse[list[UserRead]])
def list_users(
    session: Session = Depends(get_session),
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=200),
):
    """
    List all users (admin only).

    Pagination via skip/limit.
    """
    users = service.list_users(session, skip, limit)
    return ok(users, total=len(users))


@router.get("/{user_id}", response_model=APIResponse[UserRead])
def get_user(
    user_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    return ok(service.get_user(session, user_id))


@router.patch("/{user_id}/role", response_model=APIResponse[UserRead])
def change_role(
    user_id: uuid.UUID,
    payload: UserRoleUpdate,
    session: Session = Depends(get_session),
):
    """
    Update a user's role (admin only).

    Allowed roles: USER, ADMIN.
    Guests are anonymous and don't have rows.
    """
    return ok(service.update_role(session, user_id, payload))
