from typing import Any

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from sqlmodel import Session

from app.core.errors import ForbiddenError, NotFoundError, UnauthorizedError
from app.core.security import get_credential_service
from app.database import get_session
from app.models.user import User
from app.repositories.user_repo import UserRepository
from app.services.user_service import UserService

# HTTP Bearer scheme:
# - auto_error=False => missing Authorization header will NOT raise immediately
#   so we can answer with our own 401 body.
bearer_scheme = HTTPBearer(auto_error=False)

credentials = get_credential_service()
user_service = UserService(UserRepository(), credentials)


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode and verify a login token (JWT).

    Verification:
      - signature (JWT_SECRET / JWT_ALG)
      - expiration time (exp)

    Raises:
        UnauthorizedError: if token is invalid/expired.
    """
    try:
        return credentials.decode_token(token)
    except JWTError:
        raise UnauthorizedError("Invalid or expired token")


def require_auth(
    bearer: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    session: Session = Depends(get_session),
) -> User:
    """
    Resolve the current user from the bearer token.

    Flow:
      1. No Authorization header => 401.
      2. Decode JWT => extract 'id'.
      3. Load the user; missing or disabled => 401.

    Returns:
        The authenticated User.
    """
    if bearer is None:
        raise UnauthorizedError("Authentication required")

    payload = decode_access_token(bearer.credentials)
    user_id = payload.get("id")
    if not isinstance(user_id, int):
        raise UnauthorizedError("Token missing id")

    try:
        user = user_service.get_user(session, user_id)
    except NotFoundError:
        raise UnauthorizedError("User not found or not enabled!")

    if not user.enabled:
        raise UnauthorizedError("User not found or not enabled!")
    return user


def require_admin(user: User = Depends(require_auth)) -> User:
    """
    Enforce admin role.

    Raises:
        ForbiddenError: if role is not admin.
    """
    if user.role != "admin":
        raise ForbiddenError("Admin access required")
    return user
