# app/services/category_service.py
import logging
from typing import Any

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session

from app.core.errors import (
    ConflictError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from app.core.validators import parse_id, validate_model
from app.models.category import Category
from app.repositories.category_repo import CategoryRepository
from app.schemas.category import CategoryCreate

logger = logging.getLogger(__name__)

CATEGORY_MESSAGES = {
    "name": "Category name is required and must be a non-empty string!",
}


class CategoryService:
    """
    Business logic for Category.

    Responsibilities:
      - name validation and uniqueness
      - existence check before delete
      - refuse to delete a category that still has products
    """

    def __init__(self, repo: CategoryRepository):
        self.repo = repo

    @staticmethod
    def parse_input(name: Any) -> CategoryCreate:
        return validate_model(CategoryCreate, {"name": name}, CATEGORY_MESSAGES)

    @classmethod
    def validate_input(cls, name: Any) -> ValidationError | None:
        try:
            cls.parse_input(name)
        except ValidationError as error:
            return error
        return None

    def create(self, session: Session, name: Any) -> Category:
        """
        Create a category with a trimmed, unique name.

        Raises:
            ValidationError: missing/blank name.
            ConflictError: name already taken.
        """
        payload = self.parse_input(name)
        try:
            if self.repo.get_by_name(session, payload.name) is not None:
                raise ConflictError("Category already exists!")
            return self.repo.create(session, Category(name=payload.name))
        except IntegrityError as exc:
            # Lost a race against a concurrent create
            session.rollback()
            raise ConflictError("Category already exists!") from exc
        except SQLAlchemyError as exc:
            session.rollback()
            logger.exception("Error creating category: %s", exc)
            raise StoreError("Server error") from exc

    def fetch_all(self, session: Session) -> list[Category]:
        try:
            return self.repo.list_all(session)
        except SQLAlchemyError as exc:
            logger.exception("Error fetching categories: %s", exc)
            raise StoreError("Server error") from exc

    def delete(self, session: Session, category_id: Any) -> None:
        """
        Delete a category by id.

        Raises:
            InvalidIdError: id missing or not numeric.
            NotFoundError: no such category.
            ConflictError: products still reference the category.
        """
        category_id = parse_id(category_id, "Invalid or missing category ID")
        try:
            category = self.repo.get_by_id(session, category_id)
            if not category:
                raise NotFoundError("Category not found")

            if self.repo.count_products(session, category_id) > 0:
                raise ConflictError("Category still has products")

            self.repo.delete(session, category)
        except IntegrityError as exc:
            # A product was added concurrently
            session.rollback()
            raise ConflictError("Category still has products") from exc
        except SQLAlchemyError as exc:
            session.rollback()
            logger.exception("Error deleting category: %s", exc)
            raise StoreError("Server error") from exc
