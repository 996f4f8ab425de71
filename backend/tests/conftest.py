"""Pytest configuration and fixtures for testing."""
import os
import pytest
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

# Set test environment before importing app modules
os.environ['USE_MOCK_DATA'] = 'true'
os.environ['DATABASE_URL'] = 'sqlite://'

from app.api.deps import get_store
from app.data.seed import seed_categories, seed_products
from app.main import app
from app.services.category_store import MemoryCategoryStore
from app.models import CategoryTable, ProductTable  # noqa: F401




@pytest.fixture
def categories():
    """Fresh copy of the seed categories."""
    return seed_categories()


@pytest.fixture
def products():
    return seed_products()


@pytest.fixture
def store(categories, products) -> MemoryCategoryStore:
    return MemoryCategoryStore(categories, products)


@pytest.fixture
def engine():
    """In-memory SQLite engine shared across connections of one test."""
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(test_engine)
    yield test_engine
    SQLModel.metadata.drop_all(test_engine)
    test_engine.dispose()


@pytest.fixture
def db_session(engine) -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


@pytest.fixture
def api_client(store) -> Generator[TestClient, None, None]:
    """Test client backed by a private in-memory store."""
    app.dependency_overrides[get_store] = lambda: store
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def sample_category_data():
    return {
        "name": "Áo khoác",
        "nameEn": "Outerwear",
        "nameJa": "アウター",
        "slug": "outerwear",
    }
