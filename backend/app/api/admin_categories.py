from fastapi import APIRouter, Depends, Query, status
from typing import Optional
import logging
from app.api.deps import get_store
from app.core.exceptions import NotFoundError
from app.schemas.category import (
    CategoryCreate, CategoryPatch, CategoryUpdate,
    CategoryResponse, CategoryListResponse, MessageResponse
)
from app.services.categories import refresh_product_counts
from app.services.category_store import CategoryStore

router = APIRouter(prefix="/api/admin/categories", tags=["admin-categories"])

logger = logging.getLogger(__name__)


@router.get("/", response_model=CategoryListResponse)
def list_categories(
    is_active: Optional[bool] = Query(None, alias="isActive"),
    parent_id: Optional[str] = Query(None, alias="parentId"),
    store: CategoryStore = Depends(get_store)
):
    """All categories, active or not, with product counts recomputed"""
    categories = refresh_product_counts(store.list_all(), store.list_products())

    if is_active is not None:
        categories = [c for c in categories if c.is_active == is_active]
    if parent_id is not None:
        categories = [c for c in categories if c.parent_id == parent_id]

    categories.sort(key=lambda c: c.name)
    return CategoryListResponse(categories=categories)


@router.get("/{category_id}", response_model=CategoryResponse)
def get_category(category_id: str, store: CategoryStore = Depends(get_store)):
    category = store.get(category_id)
    if category is None:
        raise NotFoundError(category_id)
    return CategoryResponse(category=category)


@router.post("/", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
def create_category(data: CategoryCreate, store: CategoryStore = Depends(get_store)):
    category = store.create(data)
    return CategoryResponse(message="Category created successfully", category=category)


@router.put("/{category_id}", response_model=CategoryResponse)
@router.patch("/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: str,
    data: CategoryPatch,
    store: CategoryStore = Depends(get_store)
):
    """Partial update: fields absent from the body keep their value"""
    request = CategoryUpdate(id=category_id, **data.model_dump(exclude_unset=True))
    category = store.update(request)
    return CategoryResponse(message="Category updated successfully", category=category)


@router.delete("/{category_id}", response_model=MessageResponse)
def delete_category(category_id: str, store: CategoryStore = Depends(get_store)):
    store.delete(category_id)
    return MessageResponse(message="Category deleted successfully")


@router.post("/recount", response_model=CategoryListResponse)
def recount_products(store: CategoryStore = Depends(get_store)):
    """Rebuild the cached product count of every category"""
    categories = store.recount()
    logger.info("Recount requested, %d categories refreshed", len(categories))
    return CategoryListResponse(categories=categories)
