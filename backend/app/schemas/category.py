from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Optional, List
from datetime import datetime, timezone

from app.schemas.product import ProductResponse


class CamelModel(BaseModel):
    """JSON uses camelCase keys, Python code uses snake_case attributes"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class Category(CamelModel):
    """Canonical category record; instances are immutable"""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    name_en: Optional[str] = None
    name_ja: Optional[str] = None
    description: Optional[str] = None
    description_en: Optional[str] = None
    description_ja: Optional[str] = None
    image: Optional[str] = None
    slug: str
    is_active: bool = Field(strict=True)
    parent_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    # Cache of the number of products referencing this category
    product_count: Optional[int] = Field(default=None, ge=0)

    @field_validator("created_at", "updated_at")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class CategoryCreate(CamelModel):
    """Fields a caller may supply when creating a category"""
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str
    name_en: Optional[str] = None
    name_ja: Optional[str] = None
    description: Optional[str] = None
    description_en: Optional[str] = None
    description_ja: Optional[str] = None
    image: Optional[str] = None
    slug: str
    parent_id: Optional[str] = None
    is_active: bool = Field(default=True, strict=True)


class CategoryPatch(CamelModel):
    """Partial update body; only explicitly sent fields are applied"""
    model_config = ConfigDict(str_strip_whitespace=True)

    name: Optional[str] = None
    name_en: Optional[str] = None
    name_ja: Optional[str] = None
    description: Optional[str] = None
    description_en: Optional[str] = None
    description_ja: Optional[str] = None
    image: Optional[str] = None
    slug: Optional[str] = None
    parent_id: Optional[str] = None
    is_active: Optional[bool] = Field(default=None, strict=True)


class CategoryUpdate(CategoryPatch):
    id: str


class CategoryTreeNode(Category):
    """Category with its subcategories nested below it"""
    children: List["CategoryTreeNode"] = []


class CategoryResponse(CamelModel):
    message: Optional[str] = None
    category: Category


class CategoryListResponse(CamelModel):
    categories: List[Category]


class CategoryTreeResponse(CamelModel):
    categories: List[CategoryTreeNode]


class Pagination(CamelModel):
    page: int
    limit: int
    total: int
    pages: int


class CategoryProductsResponse(CamelModel):
    category: Category
    products: List[ProductResponse]
    pagination: Pagination


class MessageResponse(CamelModel):
    message: str
