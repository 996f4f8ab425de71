import threading
from typing import Iterator, Optional
from sqlmodel import Session
from app.core.config import settings
from app.data.seed import seed_categories, seed_products
from app.db.session import engine
from app.services.category_store import CategoryStore, MemoryCategoryStore, SQLCategoryStore

# Shared in-memory catalog for mock mode, built from a copy of the seed data
_memory_store: Optional[MemoryCategoryStore] = None
_memory_store_lock = threading.Lock()


def get_db():
    with Session(engine) as session:
        yield session


def get_memory_store() -> MemoryCategoryStore:
    global _memory_store
    if _memory_store is None:
        with _memory_store_lock:
            if _memory_store is None:
                _memory_store = MemoryCategoryStore(
                    seed_categories(),
                    seed_products(),
                    default_image=settings.DEFAULT_CATEGORY_IMAGE,
                )
    return _memory_store


def get_store() -> Iterator[CategoryStore]:
    if settings.USE_MOCK_DATA:
        yield get_memory_store()
        return

    with Session(engine) as session:
        yield SQLCategoryStore(session, default_image=settings.DEFAULT_CATEGORY_IMAGE)
