# app/schemas/user.py
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator
from sqlmodel import SQLModel

# App-level roles.
Role = Literal["user", "admin"]

MIN_PASSWORD_LENGTH = 4


class UserCredentials(BaseModel):
    """
    Register/login input.

    Validation rules:
      - email must be a string that is not blank (kept as sent; lookups
        are exact and case-sensitive)
      - password is required and at least MIN_PASSWORD_LENGTH characters
    """

    model_config = ConfigDict(extra="forbid")

    email: StrictStr
    password: StrictStr = Field(min_length=MIN_PASSWORD_LENGTH)

    @field_validator("email")
    @classmethod
    def email_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("email cannot be empty")
        return v

    @field_validator("password", mode="before")
    @classmethod
    def password_present(cls, v):
        if v is None or v == "":
            raise ValueError("password is required")
        return v


class UserRead(SQLModel):
    """Response schema returned to clients (no password hash)."""

    id: int
    email: str
    role: Role
    enabled: bool
    created_at: datetime


class TokenPayload(SQLModel):
    """Claims embedded in a login token."""

    id: int
    email: str
    role: Role


class LoginResult(SQLModel):
    user: TokenPayload
    token: str
