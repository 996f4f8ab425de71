from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, List, TYPE_CHECKING
from datetime import datetime

if TYPE_CHECKING:
    from .product import ProductTable


class CategoryTable(SQLModel, table=True):
    __tablename__ = "categories"

    id: str = Field(primary_key=True)
    name: str = Field(index=True)
    name_en: Optional[str] = None
    name_ja: Optional[str] = None
    description: Optional[str] = None
    description_en: Optional[str] = None
    description_ja: Optional[str] = None
    image: Optional[str] = None
    slug: str = Field(unique=True, index=True)
    parent_id: Optional[str] = Field(default=None, foreign_key="categories.id", index=True)

    is_active: bool = Field(default=True, index=True)

    created_at: datetime
    updated_at: datetime

    # Denormalized, rebuilt by the recount job
    product_count: int = Field(default=0)

    # Relationships
    products: List["ProductTable"] = Relationship(back_populates="category")
