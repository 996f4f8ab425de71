from fastapi import APIRouter, Depends, Query
from typing import Optional
from math import ceil
from app.api.deps import get_store
from app.core.config import settings
from app.core.exceptions import NotFoundError
from app.schemas.category import (
    Category, CategoryResponse, CategoryListResponse, CategoryProductsResponse,
    CategoryTreeResponse, Pagination
)
from app.services.categories import build_tree, is_visible, visible
from app.services.category_store import CategoryStore

router = APIRouter(prefix="/api/categories", tags=["categories"])


def _matches(category: Category, needle: str) -> bool:
    names = (category.name, category.name_en, category.name_ja, category.slug)
    return any(needle in name.lower() for name in names if name)


def _visible_or_404(category: Optional[Category], key: str) -> Category:
    if category is None or not is_visible(category):
        raise NotFoundError(key)
    return category


@router.get("/", response_model=CategoryListResponse)
def list_categories(
    q: Optional[str] = Query(None, description="Search in localized names"),
    parent_id: Optional[str] = Query(
        None, alias="parentId", description="Only direct subcategories of this category"
    ),
    store: CategoryStore = Depends(get_store)
):
    """Active categories ordered by name"""
    categories = visible(store.list_all())

    if parent_id is not None:
        categories = [c for c in categories if c.parent_id == parent_id]

    if q and q.strip():
        needle = q.strip().lower()
        categories = [c for c in categories if _matches(c, needle)]

    categories.sort(key=lambda c: c.name)
    return CategoryListResponse(categories=categories)


@router.get("/tree", response_model=CategoryTreeResponse)
def get_category_tree(store: CategoryStore = Depends(get_store)):
    """Active categories nested under their parents; hidden parents hide their branch"""
    return CategoryTreeResponse(categories=build_tree(visible(store.list_all())))


@router.get("/slug/{slug}", response_model=CategoryResponse)
def get_category_by_slug(slug: str, store: CategoryStore = Depends(get_store)):
    category = _visible_or_404(store.get_by_slug(slug), slug)
    return CategoryResponse(category=category)


@router.get("/{category_id}", response_model=CategoryResponse)
def get_category(category_id: str, store: CategoryStore = Depends(get_store)):
    category = _visible_or_404(store.get(category_id), category_id)
    return CategoryResponse(category=category)


@router.get("/{category_id}/products", response_model=CategoryProductsResponse)
def list_category_products(
    category_id: str,
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    store: CategoryStore = Depends(get_store)
):
    """Active products of a category, paginated"""
    category = _visible_or_404(store.get(category_id), category_id)
    products, total = store.page_products(category_id, page, limit)

    return CategoryProductsResponse(
        category=category,
        products=products,
        pagination=Pagination(
            page=page,
            limit=limit,
            total=total,
            pages=ceil(total / limit) if total else 0,
        ),
    )
