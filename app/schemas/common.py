# app/schemas/common.py
from typing import Any

from sqlmodel import SQLModel


class Message(SQLModel):
    """Plain `{"message": ...}` response body."""

    message: str


def body_field(payload: Any, key: str) -> Any:
    """`payload[key]` for a JSON object body, None for anything else."""
    if isinstance(payload, dict):
        return payload.get(key)
    return None
