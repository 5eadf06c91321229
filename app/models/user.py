# app/models/user.py
from datetime import datetime, timezone
from typing import Optional

from sqlmodel import SQLModel, Field


class User(SQLModel, table=True):
    """
    Registered account.

    Role:
      - "user" | "admin"
      - new accounts start as "user"; admins are promoted manually.

    `password` holds the bcrypt hash, never the plaintext.
    `enabled` gates login.
    """

    __tablename__ = "users"

    id: Optional[int] = Field(
        default=None,
        primary_key=True,
    )

    email: str = Field(
        unique=True,
        index=True,
        description="Login email (case-sensitive, unique)",
    )

    password: str = Field(
        description="bcrypt hash of the password",
    )

    # Application role
    role: str = Field(
        default="user",
        index=True,
        description="Application role: user | admin",
    )

    enabled: bool = Field(
        default=True,
        description="Disabled accounts cannot log in",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )
