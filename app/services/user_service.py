# app/services/user_service.py
import logging
from typing import Any

from jose import JWTError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session

from app.core.errors import (
    ConflictError,
    NotFoundError,
    StoreError,
    UnauthorizedError,
    ValidationError,
)
from app.core.security import CredentialService
from app.core.validators import validate_model
from app.models.user import User
from app.repositories.user_repo import UserRepository
from app.schemas.user import (
    MIN_PASSWORD_LENGTH,
    LoginResult,
    TokenPayload,
    UserCredentials,
)

logger = logging.getLogger(__name__)

CREDENTIAL_MESSAGES = {
    "email": "Invalid email format!",
    "password:value_error": "Password is required!",
    "password:missing": "Password is required!",
    "password:string_type": "Password must be a string!",
    "password": f"Password must be at least {MIN_PASSWORD_LENGTH} characters long!",
}


class UserService:
    """
    Business logic for User.

    Responsibilities:
      - validate register/login input
      - reject duplicate emails
      - delegate hashing, verification and token signing to CredentialService
    """

    def __init__(self, repo: UserRepository, credentials: CredentialService):
        self.repo = repo
        self.credentials = credentials

    @staticmethod
    def parse_credentials(email: Any, password: Any) -> UserCredentials:
        """
        Raises:
            ValidationError: first problem with email, then password.
        """
        return validate_model(
            UserCredentials,
            {"email": email, "password": password},
            CREDENTIAL_MESSAGES,
        )

    @classmethod
    def validate_input(cls, email: Any, password: Any) -> ValidationError | None:
        """
        Check register/login input.

        Returns:
            A ValidationError describing the first problem, or None.
        """
        try:
            cls.parse_credentials(email, password)
        except ValidationError as error:
            return error
        return None

    def _fetch_by_email(self, session: Session, email: str) -> User | None:
        try:
            return self.repo.get_by_email(session, email)
        except SQLAlchemyError as exc:
            logger.exception("Error fetching user: %s", exc)
            raise StoreError("Server error") from exc

    def _hash(self, password: str) -> str:
        try:
            return self.credentials.hash_password(password)
        except (ValueError, TypeError) as exc:
            logger.exception("Error hashing password: %s", exc)
            raise StoreError("Server error") from exc

    def register(self, session: Session, email: Any, password: Any) -> User:
        """
        Create a new account.

        Raises:
            ValidationError: bad email/password.
            ConflictError: email already registered.
            StoreError: unexpected database or hashing failure.
        """
        creds = self.parse_credentials(email, password)

        if self._fetch_by_email(session, creds.email) is not None:
            raise ConflictError("Email already exists!")

        user = User(email=creds.email, password=self._hash(creds.password))
        try:
            return self.repo.create(session, user)
        except IntegrityError as exc:
            # Lost a race against a concurrent registration
            session.rollback()
            raise ConflictError("Email already exists!") from exc
        except SQLAlchemyError as exc:
            session.rollback()
            logger.exception("Error during user registration: %s", exc)
            raise StoreError("Server error") from exc

    def login(self, session: Session, email: Any, password: Any) -> LoginResult:
        """
        Check credentials and issue a one-day token.

        The token payload is {id, email, role}; the password hash never
        leaves this method.

        Raises:
            ValidationError: bad email/password shape.
            UnauthorizedError: unknown or disabled user, wrong password.
        """
        creds = self.parse_credentials(email, password)

        user = self._fetch_by_email(session, creds.email)
        if not user or not user.enabled:
            raise UnauthorizedError("User not found or not enabled!")

        if not self.credentials.verify_password(creds.password, user.password):
            raise UnauthorizedError("Invalid password!")

        payload = TokenPayload(id=user.id, email=user.email, role=user.role)
        try:
            token = self.credentials.issue_token(payload.model_dump())
        except JWTError as exc:
            logger.exception("Error signing token: %s", exc)
            raise StoreError("Server error") from exc
        return LoginResult(user=payload, token=token)

    def get_user(self, session: Session, user_id: int) -> User:
        """
        Get a user by id.

        Raises:
            NotFoundError: if not found.
        """
        user = self.repo.get_by_id(session, user_id)
        if not user:
            raise NotFoundError("User not found")
        return user
