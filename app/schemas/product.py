# app/schemas/product.py
from datetime import datetime
from typing import Literal

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    StrictFloat,
    StrictInt,
    StrictStr,
    field_validator,
)
from sqlmodel import SQLModel

from app.core.validators import RowLimit
from app.schemas.category import CategoryRead

SortField = Literal[
    "id",
    "title",
    "price",
    "quantity",
    "created_at",
    "createdAt",
    "category_id",
    "categoryId",
]


class ImagePayload(BaseModel):
    """
    One image record as uploaded by the client (CDN response fields).

    Unknown keys are dropped; the four known ones must be strings if present.
    """

    model_config = ConfigDict(extra="ignore")

    asset_id: StrictStr | None = None
    public_id: StrictStr | None = None
    url: StrictStr | None = None
    secure_url: StrictStr | None = None


class ProductPayload(BaseModel):
    """
    Payload for creating or updating a product.

    - category_id also accepted as `categoryId`
    - title is trimmed and cannot be empty
    - description is trimmed; empty becomes None
    - price / quantity default to 0 when missing or null
    - images default to [] when missing or null
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    category_id: StrictInt = Field(
        gt=0,
        validation_alias=AliasChoices("category_id", "categoryId"),
    )
    title: StrictStr
    description: StrictStr | None = None
    price: StrictFloat = Field(default=0, ge=0, allow_inf_nan=False)
    quantity: StrictInt = Field(default=0, ge=0)
    images: list[ImagePayload] = Field(default_factory=list)

    @field_validator("title")
    @classmethod
    def normalize_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("title cannot be empty")
        return v

    @field_validator("description")
    @classmethod
    def normalize_description(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None

    @field_validator("price", "quantity", mode="before")
    @classmethod
    def zero_when_null(cls, v):
        return 0 if v is None else v

    @field_validator("images", mode="before")
    @classmethod
    def empty_when_null(cls, v):
        return [] if v is None else v


class ProductSortQuery(BaseModel):
    """Body of POST /product-sort."""

    model_config = ConfigDict(extra="forbid")

    sort: SortField = "created_at"
    order: Literal["asc", "desc"] = "desc"
    limit: RowLimit = 20

    @field_validator("order", mode="before")
    @classmethod
    def lowercase_order(cls, v):
        return v.lower() if isinstance(v, str) else v


class ImageRead(SQLModel):
    id: int
    asset_id: str | None = None
    public_id: str | None = None
    url: str | None = None
    secure_url: str | None = None
    product_id: int


class ProductRead(SQLModel):
    """
    Product representation for clients, with its category and images.
    """

    id: int
    category_id: int
    title: str
    description: str | None = None
    price: float
    quantity: int
    created_at: datetime
    category: CategoryRead | None = None
    images: list[ImageRead] = []
