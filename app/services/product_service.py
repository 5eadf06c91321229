# app/services/product_service.py
import logging
from typing import Any

from pydantic import StrictStr, TypeAdapter
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, col

from app.core.errors import (
    CatalogError,
    InvalidFilterKeyError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from app.core.validators import (
    FinitePrice,
    PositiveId,
    parse_id,
    parse_limit,
    validate_model,
    validate_value,
)
from app.models.product import Image, Product
from app.repositories.category_repo import CategoryRepository
from app.repositories.product_repo import ProductRepository
from app.schemas.product import ImagePayload, ProductPayload, ProductSortQuery

logger = logging.getLogger(__name__)

# Columns a caller may sort by (ProductSortQuery.sort). camelCase aliases
# are accepted for clients written against the JSON field names.
SORTABLE_COLUMNS = {
    "id": col(Product.id),
    "title": col(Product.title),
    "price": col(Product.price),
    "quantity": col(Product.quantity),
    "created_at": col(Product.created_at),
    "createdAt": col(Product.created_at),
    "category_id": col(Product.category_id),
    "categoryId": col(Product.category_id),
}

FILTER_KEYS = ("title", "category", "price")

PRODUCT_MESSAGES = {
    "category_id": "Category ID is required and must be a number!",
    "categoryId": "Category ID is required and must be a number!",
    "title": "Title is required and must be a non-empty string!",
    "description": "Description must be a string!",
    "price": "Price must be a positive number or zero!",
    "quantity": "Quantity must be a non-negative integer!",
    "images": "Images must be an array!",
    "images.*": "Each image must be an object!",
    **{
        f"images.*.{field}": "Image fields must be strings!"
        for field in ImagePayload.model_fields
    },
}

SORT_MESSAGES = {
    "sort": "Invalid sort field!",
    "order": "Sort order must be 'asc' or 'desc'!",
    "limit": "Limit must be a non-negative integer!",
}

_title_filter = TypeAdapter(StrictStr)
_category_filter = TypeAdapter(list[PositiveId])
_price_filter = TypeAdapter(tuple[FinitePrice, FinitePrice])


class ProductService:
    """
    Business logic for Product & Image.

    Responsibilities:
      - validate input and fill in defaults (price, quantity)
      - existence checks before read-one/update/delete
      - keep a product's images in sync with the last update (replace-all)
      - build sort/limit/filter queries from caller input
    """

    def __init__(self, repo: ProductRepository, category_repo: CategoryRepository):
        self.repo = repo
        self.category_repo = category_repo

    # ----- Validation -----

    @staticmethod
    def parse_input(data: Any) -> ProductPayload:
        """
        Validate a create/update body into a ProductPayload.

        The returned payload carries the defaults (price and quantity 0,
        no images) and trimmed title/description.

        Raises:
            ValidationError: for the first failing field.
        """
        return validate_model(ProductPayload, data, PRODUCT_MESSAGES)

    @classmethod
    def validate_input(cls, data: Any) -> ValidationError | None:
        """
        Returns:
            A ValidationError for the first failing field, or None.
        """
        try:
            cls.parse_input(data)
        except ValidationError as error:
            return error
        return None

    # ----- Helpers -----

    @staticmethod
    def _build_images(images: list[ImagePayload]) -> list[Image]:
        """Map caller image records onto Image rows."""
        return [Image(**image.model_dump()) for image in images]

    @staticmethod
    def _apply_fields(product: Product, payload: ProductPayload) -> None:
        product.category_id = payload.category_id
        product.title = payload.title
        product.description = payload.description
        product.price = payload.price
        product.quantity = payload.quantity

    def _ensure_category(self, session: Session, category_id: int) -> None:
        if self.category_repo.get_by_id(session, category_id) is None:
            raise NotFoundError("Category not found")

    def _get_existing(self, session: Session, product_id: int) -> Product:
        product = self.repo.get_by_id(session, product_id)
        if not product:
            raise NotFoundError(f"Product with ID {product_id} not found")
        return product

    def _commit(self, session: Session, action: str) -> None:
        try:
            session.commit()
        except IntegrityError as exc:
            session.rollback()
            logger.warning("Integrity error while %s product: %s", action, exc)
            raise ValidationError("Product references a missing category") from exc

    def _run_mutation(self, session: Session, action: str, operation):
        """
        Run `operation` inside one transaction.

        Any failure rolls the session back so a product never ends up
        with a mix of old and new images.
        """
        try:
            result = operation()
            self._commit(session, action)
            return result
        except CatalogError:
            session.rollback()
            raise
        except SQLAlchemyError as exc:
            session.rollback()
            logger.exception("Error %s product: %s", action, exc)
            raise StoreError("Server error") from exc

    def _query(self, action: str, operation):
        try:
            return operation()
        except SQLAlchemyError as exc:
            logger.exception("Error %s products: %s", action, exc)
            raise StoreError("Server error") from exc

    # ----- Mutations -----

    def create(self, session: Session, data: Any) -> Product:
        """
        Create a product together with its images.

        Raises:
            ValidationError: bad input.
            NotFoundError: category does not exist.
        """
        payload = self.parse_input(data)

        def operation() -> Product:
            self._ensure_category(session, payload.category_id)
            product = Product()
            self._apply_fields(product, payload)
            product.images = self._build_images(payload.images)
            return self.repo.add(session, product)

        product = self._run_mutation(session, "creating", operation)
        session.refresh(product)
        return product

    def update(self, session: Session, product_id: Any, data: Any) -> Product:
        """
        Update a product and replace all of its images.

        The images supplied in `data` become the product's full image
        set; an empty or missing list leaves it with none.

        Raises:
            ValidationError / InvalidIdError: bad input or id.
            NotFoundError: product or category does not exist.
        """
        payload = self.parse_input(data)
        product_id = parse_id(product_id)

        def operation() -> Product:
            product = self._get_existing(session, product_id)
            self._ensure_category(session, payload.category_id)
            self.repo.replace_images(session, product, self._build_images(payload.images))
            self._apply_fields(product, payload)
            session.add(product)
            session.flush()
            return product

        product = self._run_mutation(session, "updating", operation)
        session.refresh(product)
        return product

    def delete(self, session: Session, product_id: Any) -> None:
        """
        Delete a product and its images.

        Raises:
            InvalidIdError: bad id.
            NotFoundError: no such product.
        """
        product_id = parse_id(product_id)

        def operation() -> None:
            product = self._get_existing(session, product_id)
            self.repo.delete(session, product)

        self._run_mutation(session, "deleting", operation)

    # ----- Reads -----

    def fetch_limit(self, session: Session, limit: Any) -> list[Product]:
        """Newest products first, at most `limit`."""
        limit = parse_limit(limit)
        return self._query("fetching", lambda: self.repo.list_newest(session, limit))

    def fetch_one(self, session: Session, product_id: Any) -> Product:
        """
        Raises:
            InvalidIdError: bad id.
            NotFoundError: no such product.
        """
        product_id = parse_id(product_id)
        product = self._query(
            "fetching", lambda: self.repo.get_with_relations(session, product_id)
        )
        if not product:
            raise NotFoundError(f"Product with ID {product_id} not found")
        return product

    def fetch_sort(
        self,
        session: Session,
        sort: Any = "created_at",
        order: Any = "desc",
        limit: Any = 20,
    ) -> list[Product]:
        """
        At most `limit` products ordered by `sort` in direction `order`.

        Raises:
            ValidationError: unknown column, bad direction or limit.
        """
        return self.sort_query(session, {"sort": sort, "order": order, "limit": limit})

    def sort_query(self, session: Session, data: Any) -> list[Product]:
        """Validate a POST /product-sort body (see ProductSortQuery) and run it."""
        query = validate_model(ProductSortQuery, data, SORT_MESSAGES)
        column = SORTABLE_COLUMNS[query.sort]
        return self._query(
            "sorting",
            lambda: self.repo.list_sorted(session, column, query.order == "desc", query.limit),
        )

    def filter_by(self, session: Session, key: str, value: Any) -> list[Product]:
        """
        Apply exactly one filter:

          - title:    substring match
          - category: category id in `value` (list of ids)
          - price:    min <= price <= max for `value` == [min, max]

        Raises:
            InvalidFilterKeyError: key is not one of the above.
            ValidationError: value has the wrong shape for the key.
        """
        if key == "title":
            title = validate_value(_title_filter, value, "Title filter must be a string!")
            return self._query(
                "filtering", lambda: self.repo.list_title_contains(session, title)
            )

        if key == "category":
            category_ids = validate_value(
                _category_filter, value, "Category filter must be a list of IDs!"
            )
            return self._query(
                "filtering", lambda: self.repo.list_in_categories(session, category_ids)
            )

        if key == "price":
            min_price, max_price = validate_value(
                _price_filter, value, "Price filter must be a [min, max] pair!"
            )
            return self._query(
                "filtering",
                lambda: self.repo.list_price_between(session, min_price, max_price),
            )

        raise InvalidFilterKeyError("Invalid filter key")

    def fetch_filter(
        self,
        session: Session,
        title: Any = None,
        category: Any = None,
        price: Any = None,
    ) -> list[Product]:
        """
        Pick one filter from the supplied fields and run it.

        Filters are not combined: of title, category and price, the last
        one supplied wins. Nothing supplied returns an empty list.
        """
        selected = None
        for key, value in zip(FILTER_KEYS, (title, category, price)):
            if value is not None and value != "":
                selected = (key, value)
        if selected is None:
            return []
        return self.filter_by(session, *selected)
