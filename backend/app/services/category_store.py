import logging
import threading
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select, func, col

from app.core.exceptions import (
    NotFoundError, DuplicateSlugError, CategoryInUseError, HasSubcategoriesError
)
from app.models.category import CategoryTable
from app.models.product import ProductTable
from app.schemas.category import Category, CategoryCreate, CategoryUpdate
from app.schemas.product import ProductResponse
from app.services.categories import (
    PLACEHOLDER_IMAGE,
    apply_update,
    build_category,
    count_products,
    find_by_id,
    find_by_slug,
    refresh_product_counts,
    subcategories,
)

logger = logging.getLogger(__name__)

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


class CategoryStore:
    """
    Storage for categories plus the write path built on the pure contracts.

    Subclasses provide the primitives (``list_all``, ``insert``, ...). The
    write operations take a snapshot, apply the contract and commit while
    holding a process-wide lock, so slug and id checks never race another
    writer in the same process.
    """

    _write_lock = threading.RLock()

    def __init__(self, default_image: str = PLACEHOLDER_IMAGE):
        self.default_image = default_image

    def list_all(self) -> List[Category]:
        raise NotImplementedError

    def get(self, id: str) -> Optional[Category]:
        return find_by_id(self.list_all(), id)

    def get_by_slug(self, slug: str) -> Optional[Category]:
        return find_by_slug(self.list_all(), slug)

    def insert(self, category: Category):
        raise NotImplementedError

    def replace(self, category: Category):
        raise NotImplementedError

    def remove(self, id: str):
        raise NotImplementedError

    def list_products(self, category_id: Optional[str] = None) -> List[ProductResponse]:
        raise NotImplementedError

    def page_products(
        self, category_id: str, page: int, limit: int
    ) -> Tuple[List[ProductResponse], int]:
        """One page of the active products of a category, newest first, with their total"""
        products = [p for p in self.list_products(category_id) if p.is_active]
        products.sort(key=lambda p: p.created_at or _EPOCH, reverse=True)
        start = (page - 1) * limit
        return products[start:start + limit], len(products)

    def create(self, request: CategoryCreate, now: Optional[datetime] = None) -> Category:
        with self._write_lock:
            category = build_category(
                request,
                self.list_all(),
                now=now,
                default_image=self.default_image,
            )
            self.insert(category)
        logger.info("Category created: %s (%s)", category.id, category.slug)
        return category

    def update(self, request: CategoryUpdate, now: Optional[datetime] = None) -> Category:
        with self._write_lock:
            category = apply_update(request, self.list_all(), now=now)
            self.replace(category)
        logger.info("Category updated: %s", category.id)
        return category

    def delete(self, id: str):
        with self._write_lock:
            if self.get(id) is None:
                raise NotFoundError(id)

            product_count = count_products(id, self.list_products(id))
            if product_count:
                raise CategoryInUseError(id, product_count)

            children = subcategories(self.list_all(), id)
            if children:
                raise HasSubcategoriesError(id, len(children))

            self.remove(id)
        logger.info("Category deleted: %s", id)

    def recount(self) -> List[Category]:
        """Rebuild every cached product count from the product set"""
        with self._write_lock:
            refreshed = refresh_product_counts(self.list_all(), self.list_products())
            for category in refreshed:
                self.replace(category)
        logger.info("Product counts refreshed for %d categories", len(refreshed))
        return refreshed


class MemoryCategoryStore(CategoryStore):
    """Keeps its own copies of the given categories and products"""

    def __init__(
        self,
        categories: Iterable[Category] = (),
        products: Iterable[ProductResponse] = (),
        default_image: str = PLACEHOLDER_IMAGE,
    ):
        super().__init__(default_image)
        self._categories: List[Category] = list(categories)
        self._products: List[ProductResponse] = list(products)

    def list_all(self) -> List[Category]:
        return list(self._categories)

    def insert(self, category: Category):
        self._categories.append(category)

    def replace(self, category: Category):
        for index, current in enumerate(self._categories):
            if current.id == category.id:
                self._categories[index] = category
                return
        raise NotFoundError(category.id)

    def remove(self, id: str):
        self._categories = [c for c in self._categories if c.id != id]

    def list_products(self, category_id: Optional[str] = None) -> List[ProductResponse]:
        if category_id is None:
            return list(self._products)
        return [p for p in self._products if p.category_id == category_id]


def _row_values(category: Category) -> dict:
    values = category.model_dump()
    if values["product_count"] is None:
        values["product_count"] = 0
    return values


class SQLCategoryStore(CategoryStore):
    """Categories and products in the SQLModel tables"""

    def __init__(self, session: Session, default_image: str = PLACEHOLDER_IMAGE):
        super().__init__(default_image)
        self.session = session

    def list_all(self) -> List[Category]:
        stmt = select(CategoryTable).order_by(CategoryTable.created_at, CategoryTable.id)
        return [Category.model_validate(row) for row in self.session.exec(stmt).all()]

    def get(self, id: str) -> Optional[Category]:
        row = self.session.get(CategoryTable, id)
        return Category.model_validate(row) if row else None

    def get_by_slug(self, slug: str) -> Optional[Category]:
        row = self.session.exec(
            select(CategoryTable).where(CategoryTable.slug == slug)
        ).first()
        return Category.model_validate(row) if row else None

    def _commit(self, category: Category):
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise DuplicateSlugError(category.slug) from exc

    def insert(self, category: Category):
        self.session.add(CategoryTable(**_row_values(category)))
        self._commit(category)

    def replace(self, category: Category):
        row = self.session.get(CategoryTable, category.id)
        if not row:
            raise NotFoundError(category.id)

        for key, value in _row_values(category).items():
            setattr(row, key, value)

        self.session.add(row)
        self._commit(category)

    def remove(self, id: str):
        row = self.session.get(CategoryTable, id)
        if row:
            self.session.delete(row)
            self.session.commit()

    def list_products(self, category_id: Optional[str] = None) -> List[ProductResponse]:
        stmt = select(ProductTable)
        if category_id is not None:
            stmt = stmt.where(ProductTable.category_id == category_id)
        return [ProductResponse.model_validate(row) for row in self.session.exec(stmt).all()]

    def page_products(
        self, category_id: str, page: int, limit: int
    ) -> Tuple[List[ProductResponse], int]:
        filters = (ProductTable.category_id == category_id, ProductTable.is_active == True)

        total = self.session.exec(
            select(func.count()).select_from(ProductTable).where(*filters)
        ).one()

        stmt = (
            select(ProductTable)
            .where(*filters)
            .order_by(col(ProductTable.created_at).desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        products = [ProductResponse.model_validate(row) for row in self.session.exec(stmt).all()]
        return products, total
