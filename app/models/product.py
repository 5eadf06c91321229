# app/models/product.py
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

from sqlmodel import SQLModel, Field, Relationship

if TYPE_CHECKING:
    from app.models.category import Category


class Product(SQLModel, table=True):
    """
    Product catalog entry.

    Columns:
      - id, category_id, title, description, price, quantity, created_at

    Owns its images: they are deleted with the product and replaced
    wholesale on update.
    """

    __tablename__ = "products"

    id: Optional[int] = Field(
        default=None,
        primary_key=True,
    )

    category_id: int = Field(
        foreign_key="categories.id",
        index=True,
        description="FK to categories.id",
    )

    title: str = Field(
        max_length=255,
        index=True,
        description="Display title (trimmed)",
    )

    description: str | None = Field(
        default=None,
        description="Optional long description",
    )

    price: float = Field(
        default=0,
        ge=0,
        description="Unit price",
    )

    quantity: int = Field(
        default=0,
        ge=0,
        description="How many units currently in stock",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        index=True,
        description="Creation timestamp (UTC), default ordering key",
    )

    category: Optional["Category"] = Relationship(back_populates="products")

    images: list["Image"] = Relationship(
        back_populates="product",
        sa_relationship_kwargs={
            "cascade": "all, delete-orphan",
            "order_by": "Image.id",
        },
    )


class Image(SQLModel, table=True):
    """
    Image record attached to a product.

    The four asset fields are opaque strings handed over by the client
    (typically the response of an upload to an image CDN).
    """

    __tablename__ = "images"

    id: Optional[int] = Field(
        default=None,
        primary_key=True,
    )

    asset_id: str | None = Field(default=None)
    public_id: str | None = Field(default=None)
    url: str | None = Field(default=None)
    secure_url: str | None = Field(default=None)

    product_id: int | None = Field(
        default=None,
        foreign_key="products.id",
        ondelete="CASCADE",
        index=True,
        description="FK to products.id",
    )

    product: Optional[Product] = Relationship(back_populates="images")
