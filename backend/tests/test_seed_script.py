"""Tests for the database seed script and the mock-mode store dependency."""
import threading
import time
from concurrent.futures import ThreadPoolExecutor

from sqlmodel import Session, select, func

from app.api import deps
from app.data.seed import SEED_CATEGORIES
from app.models.category import CategoryTable
from app.models.product import ProductTable
from app.scripts import seed_catalog
from app.services.category_store import MemoryCategoryStore


def test_seed_catalog_is_idempotent(engine, monkeypatch, capsys):
    monkeypatch.setattr(seed_catalog, "engine", engine)

    seed_catalog.seed_catalog()
    seed_catalog.seed_catalog()

    with Session(engine) as session:
        assert session.exec(select(func.count()).select_from(CategoryTable)).one() == 5
        assert session.exec(select(func.count()).select_from(ProductTable)).one() == 23

    output = capsys.readouterr().out
    assert "Categories created: 5" in output
    assert "Category already exists: tops" in output


def test_memory_store_is_shared_copy(monkeypatch):
    monkeypatch.setattr(deps, "_memory_store", None)

    first = deps.get_memory_store()
    second = deps.get_memory_store()

    assert first is second
    assert isinstance(first, MemoryCategoryStore)
    assert first.list_all() == list(SEED_CATEGORIES)


def test_memory_store_built_once_under_concurrency(monkeypatch):
    monkeypatch.setattr(deps, "_memory_store", None)
    built = []
    start = threading.Barrier(8)

    class SlowStore(MemoryCategoryStore):
        def __init__(self, *args, **kwargs):
            built.append(self)
            time.sleep(0.05)
            super().__init__(*args, **kwargs)

    monkeypatch.setattr(deps, "MemoryCategoryStore", SlowStore)

    def build():
        start.wait()
        return deps.get_memory_store()

    with ThreadPoolExecutor(max_workers=8) as pool:
        stores = list(pool.map(lambda _: build(), range(8)))

    assert len(built) == 1
    assert all(store is stores[0] for store in stores)


def test_get_store_mock_mode(monkeypatch):
    monkeypatch.setattr(deps.settings, "USE_MOCK_DATA", True)
    monkeypatch.setattr(deps, "_memory_store", None)

    store = next(deps.get_store())

    assert store is deps.get_memory_store()
