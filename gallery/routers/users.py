# gallery/routers/users.py
from fastapi import APIRouter, Depends

from gallery.core.auth import require_auth
from gallery.models.user import User
from gallery.schemas.common import APIResponse, ok
from gallery.schemas.user import UserRead

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/me", response_model=APIResponse[UserRead])
def read_me(current_user: User = Depends(require_auth)):
    """
    Return the authenticated user's profile.

    Auth:
      - Requires a valid bearer token.
    """
    return ok(current_user)
