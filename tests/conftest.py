"""Test configuration and fixtures for the catalog backend."""

import os
from collections.abc import Generator

# Settings are read at import time by app.database / app.core.auth.
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from app.core.security import CredentialService
from app.models.category import Category
from app.models.user import User
from app.repositories.category_repo import CategoryRepository
from app.repositories.product_repo import ProductRepository
from app.repositories.user_repo import UserRepository
from app.services.category_service import CategoryService
from app.services.product_service import ProductService
from app.services.user_service import UserService


@pytest.fixture(name="session")
def session_fixture() -> Generator[Session, None, None]:
    """Fresh in-memory database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Import models to register them with the metadata
    from app.models import category, product, user  # noqa: F401

    SQLModel.metadata.create_all(engine)

    with Session(engine) as session:
        yield session


@pytest.fixture
def credentials() -> CredentialService:
    return CredentialService(secret="unit-secret", rounds=4)


@pytest.fixture
def user_service(credentials: CredentialService) -> UserService:
    return UserService(UserRepository(), credentials)


@pytest.fixture
def category_service() -> CategoryService:
    return CategoryService(CategoryRepository())


@pytest.fixture
def product_service() -> ProductService:
    return ProductService(ProductRepository(), CategoryRepository())


@pytest.fixture
def make_category(session: Session):
    def _make(name: str) -> Category:
        category = Category(name=name)
        session.add(category)
        session.commit()
        session.refresh(category)
        return category

    return _make


@pytest.fixture
def image_data():
    def _make(n: int) -> dict[str, str]:
        return {
            "asset_id": f"asset-{n}",
            "public_id": f"catalog/img-{n}",
            "url": f"http://cdn.test/img-{n}.png",
            "secure_url": f"https://cdn.test/img-{n}.png",
        }

    return _make


@pytest.fixture(name="client")
def client_fixture(session: Session) -> Generator[TestClient, None, None]:
    """TestClient bound to the in-memory session."""
    from app.database import get_session
    from app.main import app

    app.dependency_overrides[get_session] = lambda: session
    yield TestClient(app)
    app.dependency_overrides.clear()


def _token_for(session: Session, email: str, role: str) -> str:
    from app.core.auth import credentials

    user = User(email=email, password=credentials.hash_password("secret"), role=role)
    session.add(user)
    session.commit()
    session.refresh(user)
    return credentials.issue_token({"id": user.id, "email": user.email, "role": user.role})


@pytest.fixture
def admin_headers(session: Session) -> dict[str, str]:
    return {"Authorization": f"Bearer {_token_for(session, 'admin@x.com', 'admin')}"}


@pytest.fixture
def user_headers(session: Session) -> dict[str, str]:
    return {"Authorization": f"Bearer {_token_for(session, 'user@x.com', 'user')}"}
