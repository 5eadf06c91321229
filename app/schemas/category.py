# app/schemas/category.py
from datetime import datetime

from pydantic import BaseModel, ConfigDict, StrictStr, field_validator
from sqlmodel import SQLModel


class CategoryCreate(BaseModel):
    """
    Payload for creating a category.

    `name` is trimmed and must not be empty.
    """

    model_config = ConfigDict(extra="forbid")

    name: StrictStr

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v


class CategoryRead(SQLModel):
    id: int
    name: str
    created_at: datetime
