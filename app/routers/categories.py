# app/routers/categories.py
from typing import Any

from fastapi import APIRouter, Body, Depends, status
from sqlmodel import Session

from app.core.auth import require_admin
from app.database import get_session
from app.repositories.category_repo import CategoryRepository
from app.schemas.category import CategoryRead
from app.schemas.common import Message, body_field
from app.services.category_service import CategoryService

router = APIRouter(prefix="/category", tags=["Categories"])

repo = CategoryRepository()
service = CategoryService(repo)


@router.get("", response_model=list[CategoryRead])
def list_categories(session: Session = Depends(get_session)):
    """
    List every category (public).
    """
    return service.fetch_all(session)


@router.post(
    "",
    response_model=CategoryRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_category(
    payload: Any = Body(default=None),
    session: Session = Depends(get_session),
):
    """
    Create a category (admin only).

    - 409 if a category with the same (trimmed) name exists.
    """
    return service.create(session, body_field(payload, "name"))


@router.delete(
    "/{category_id}",
    response_model=Message,
    dependencies=[Depends(require_admin)],
)
def delete_category(
    category_id: str,
    session: Session = Depends(get_session),
):
    """
    Delete a category (admin only).

    - 400 for a non-numeric id, 404 if missing,
      409 while products still reference it.
    """
    service.delete(session, category_id)
    return Message(message=f"Category with ID {category_id} deleted successfully")
