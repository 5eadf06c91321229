# app/routers/users.py
from typing import Any

from fastapi import APIRouter, Body, Depends, status
from sqlmodel import Session

from app.core.auth import credentials, require_admin, require_auth
from app.database import get_session
from app.models.user import User
from app.repositories.user_repo import UserRepository
from app.schemas.common import Message, body_field
from app.schemas.user import LoginResult, UserRead
from app.services.user_service import UserService

router = APIRouter(tags=["Auth"])

repo = UserRepository()
service = UserService(repo, credentials)


@router.post(
    "/register",
    response_model=Message,
    status_code=status.HTTP_201_CREATED,
)
def register(
    payload: Any = Body(default=None),
    session: Session = Depends(get_session),
):
    """
    Register a new account.

    - 400 on invalid email/password.
    - 409 if the email is taken.
    """
    service.register(session, body_field(payload, "email"), body_field(payload, "password"))
    return Message(message="Register success!")


@router.post("/login", response_model=LoginResult)
def login(
    payload: Any = Body(default=None),
    session: Session = Depends(get_session),
):
    """
    Log in and receive a token valid for one day.
    """
    return service.login(session, body_field(payload, "email"), body_field(payload, "password"))


@router.post("/current-user", response_model=UserRead)
def current_user(user: User = Depends(require_auth)):
    """Return the authenticated user's profile."""
    return user


@router.post("/current-admin", response_model=UserRead)
def current_admin(user: User = Depends(require_admin)):
    """Same as /current-user, but only for admins."""
    return user
