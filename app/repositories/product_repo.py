# app/repositories/product_repo.py
from sqlalchemy.orm import selectinload
from sqlmodel import Session, col, select

from app.models.product import Image, Product


class ProductRepository:
    """
    Data access layer for Product & Image.

    NOTE:
      - No commits here; a product and its images are written as one
        unit. The service is responsible for session.commit() and
        session.rollback().
    """

    @staticmethod
    def _with_relations():
        """SELECT products with category and images eager-loaded."""
        return select(Product).options(
            selectinload(Product.category),
            selectinload(Product.images),
        )

    # ----- Reads -----

    def get_by_id(self, session: Session, product_id: int) -> Product | None:
        return session.get(Product, product_id)

    def get_with_relations(self, session: Session, product_id: int) -> Product | None:
        stmt = self._with_relations().where(Product.id == product_id)
        return session.exec(stmt).first()

    def list_newest(self, session: Session, limit: int) -> list[Product]:
        stmt = (
            self._with_relations()
            .order_by(col(Product.created_at).desc(), col(Product.id).desc())
            .limit(limit)
        )
        return session.exec(stmt).all()

    def list_sorted(
        self,
        session: Session,
        column,
        descending: bool,
        limit: int,
    ) -> list[Product]:
        """
        Args:
            column: a Product column attribute (already allow-listed by the caller)
            descending: sort direction
            limit: max number of rows returned
        """
        order = column.desc() if descending else column.asc()
        stmt = self._with_relations().order_by(order, col(Product.id).asc()).limit(limit)
        return session.exec(stmt).all()

    def list_title_contains(self, session: Session, fragment: str) -> list[Product]:
        stmt = (
            self._with_relations()
            .where(col(Product.title).contains(fragment, autoescape=True))
            .order_by(Product.id)
        )
        return session.exec(stmt).all()

    def list_in_categories(self, session: Session, category_ids: list[int]) -> list[Product]:
        stmt = (
            self._with_relations()
            .where(col(Product.category_id).in_(category_ids))
            .order_by(Product.id)
        )
        return session.exec(stmt).all()

    def list_price_between(
        self,
        session: Session,
        min_price: float,
        max_price: float,
    ) -> list[Product]:
        """Inclusive on both ends."""
        stmt = (
            self._with_relations()
            .where(Product.price >= min_price, Product.price <= max_price)
            .order_by(Product.id)
        )
        return session.exec(stmt).all()

    # ----- Writes (flush only) -----

    def add(self, session: Session, product: Product) -> Product:
        """
        Stage a product (and any images already attached to it) and
        assign its primary key.
        """
        session.add(product)
        session.flush()
        return product

    def replace_images(
        self,
        session: Session,
        product: Product,
        images: list[Image],
    ) -> None:
        """
        Drop every existing image of `product` and attach `images`.

        The relationship is configured with delete-orphan, so the old rows
        are deleted on flush.
        """
        product.images.clear()
        session.flush()
        product.images.extend(images)
        session.flush()

    def delete(self, session: Session, product: Product) -> None:
        """Delete a product; its images go with it (cascade)."""
        session.delete(product)
        session.flush()
