import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from sqlmodel import Session, select

from gallery.core.config import get_settings
from gallery.database import get_session
from gallery.models.user import RevokedToken, User

settings = get_settings()

# HTTP Bearer scheme:
# - auto_error=False => missing Authorization header will NOT raise immediately
#   so we can support "guest" mode (unauthenticated).
bearer_scheme = HTTPBearer(auto_error=False)

ADMIN_ROLE = "ADMIN"
USER_ROLE = "USER"


def create_access_token(user: User) -> tuple[str, datetime]:
    """
    Issue a signed access token for `user`.

    Claims:
      - sub: user id (UUID string)
      - username, role: informational only; the role is re-read from
        the database on every request
      - jti: unique token id, used by logout to revoke the token
      - exp: expiry (ACCESS_TOKEN_EXPIRE_MINUTES from now)

    Returns:
        (encoded token, expiry datetime in UTC)
    """
    expires_at = datetime.now(timezone.utc) + timedelta(
        minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
    )
    claims = {
        "sub": str(user.id),
        "username": user.username,
        "role": user.role,
        "jti": uuid.uuid4().hex,
        "exp": expires_at,
    }
    token = jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALG)
    return token, expires_at


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode and verify an access token (JWT).

    Verification:
      - signature (JWT_ALG using JWT_SECRET)
      - expiration time (exp)

    Raises:
        HTTPException(401): if token is invalid/expired.
    """
    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALG],
        )
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )


def get_token_claims(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    session: Session = Depends(get_session),
) -> dict[str, Any] | None:
    """
    Decode the bearer token if one was sent.

    Returns None for guests. Revoked tokens are rejected with 401.
    """
    if credentials is None:
        return None  # guest mode

    payload = decode_access_token(credentials.credentials)
    jti = payload.get("jti")
    if not jti or not payload.get("sub"):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token missing sub/jti",
        )

    if session.get(RevokedToken, jti) is not None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has been revoked",
        )
    return payload


def get_current_user(
    claims: dict[str, Any] | None = Depends(get_token_claims),
    session: Session = Depends(get_session),
) -> User | None:
    """
    Resolve the current user from the access token.

    Flow:
      1. If no Authorization header => guest => return None.
      2. Decode JWT => extract 'sub' (user id).
      3. Load the user row; its role is authoritative, not the token's.

    Raises:
        HTTPException(401): if token is malformed or the user no longer exists.
    """
    if claims is None:
        return None

    try:
        user_id = uuid.UUID(claims["sub"])
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid sub in token",
        )

    user = session.exec(select(User).where(User.id == user_id)).first()
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User no longer exists",
        )
    return user


def require_auth(user: User | None = Depends(get_current_user)) -> User:
    """
    Enforce authentication.

    Raises:
        HTTPException(401): if user is None.
    """
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    return user


def require_admin(user: User = Depends(require_auth)) -> User:
    """
    Enforce admin role.

    Evaluated on every request; authorization decisions are never cached.

    Raises:
        HTTPException(403): if role is not ADMIN.
    """
    if user.role != ADMIN_ROLE:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden: admin access required",
        )
    return user
