# app/models/category.py
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

from sqlmodel import SQLModel, Field, Relationship

if TYPE_CHECKING:
    from app.models.product import Product


class Category(SQLModel, table=True):
    """
    Top level of the catalog.

    Columns:
      - id, name (unique), created_at
    """

    __tablename__ = "categories"

    id: Optional[int] = Field(
        default=None,
        primary_key=True,
    )

    name: str = Field(
        max_length=255,
        unique=True,
        index=True,
        description="Display name (trimmed, unique)",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )

    products: list["Product"] = Relationship(back_populates="category")
