# app/repositories/category_repo.py
from sqlalchemy import func
from sqlmodel import Session, select

from app.models.category import Category
from app.models.product import Product


class CategoryRepository:
    """
    Data access layer for Category.

    - Pure DB operations (CRUD + queries).
    - No FastAPI, no business logic.
    """

    def get_by_id(self, session: Session, category_id: int) -> Category | None:
        return session.get(Category, category_id)

    def get_by_name(self, session: Session, name: str) -> Category | None:
        stmt = select(Category).where(Category.name == name)
        return session.exec(stmt).first()

    def list_all(self, session: Session) -> list[Category]:
        stmt = select(Category).order_by(Category.id)
        return session.exec(stmt).all()

    def count_products(self, session: Session, category_id: int) -> int:
        stmt = (
            select(func.count())
            .select_from(Product)
            .where(Product.category_id == category_id)
        )
        return int(session.exec(stmt).one() or 0)

    def create(self, session: Session, category: Category) -> Category:
        session.add(category)
        session.commit()
        session.refresh(category)
        return category

    def delete(self, session: Session, category: Category) -> None:
        session.delete(category)
        session.commit()
