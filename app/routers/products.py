# app/routers/products.py
from typing import Any

from fastapi import APIRouter, Body, Depends, status
from sqlmodel import Session

from app.core.auth import require_admin
from app.database import get_session
from app.repositories.category_repo import CategoryRepository
from app.repositories.product_repo import ProductRepository
from app.schemas.common import Message, body_field
from app.schemas.product import ProductRead
from app.services.product_service import ProductService

router = APIRouter(tags=["Products"])

repo = ProductRepository()
service = ProductService(repo, CategoryRepository())


# -------- Public endpoints --------


@router.get("/product-limit/{limit}", response_model=list[ProductRead])
def fetch_limit(
    limit: str,
    session: Session = Depends(get_session),
):
    """
    Newest products first, at most `limit`.
    """
    return service.fetch_limit(session, limit)


@router.get("/product-one/{product_id}", response_model=ProductRead)
def fetch_one(
    product_id: str,
    session: Session = Depends(get_session),
):
    """
    Get a single product with its category and images.
    """
    return service.fetch_one(session, product_id)


@router.post("/product-sort", response_model=list[ProductRead])
def fetch_sort(
    payload: Any = Body(default=None),
    session: Session = Depends(get_session),
):
    """
    Products ordered by an allow-listed column.
    """
    return service.sort_query(session, {} if payload is None else payload)


@router.post("/product-filter", response_model=list[ProductRead])
def fetch_filter(
    payload: Any = Body(default=None),
    session: Session = Depends(get_session),
):
    """
    Filter by title, category ids, or price range.

    Only one filter is applied: the last of title, category, price
    present in the body.
    """
    return service.fetch_filter(
        session,
        title=body_field(payload, "title"),
        category=body_field(payload, "category"),
        price=body_field(payload, "price"),
    )


# -------- Admin endpoints --------


@router.post(
    "/product",
    response_model=ProductRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_product(
    payload: Any = Body(default=None),
    session: Session = Depends(get_session),
):
    """
    Create a product with its images (admin only).
    """
    return service.create(session, payload)


@router.put(
    "/product/{product_id}",
    response_model=ProductRead,
    dependencies=[Depends(require_admin)],
)
def update_product(
    product_id: str,
    payload: Any = Body(default=None),
    session: Session = Depends(get_session),
):
    """
    Update a product (admin only).

    The images in the body replace the product's images entirely.
    """
    return service.update(session, product_id, payload)


@router.delete(
    "/product/{product_id}",
    response_model=Message,
    dependencies=[Depends(require_admin)],
)
def delete_product(
    product_id: str,
    session: Session = Depends(get_session),
):
    """
    Delete a product and its images (admin only).
    """
    service.delete(session, product_id)
    return Message(message="Delete product success")
