from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, TYPE_CHECKING
from datetime import datetime
from decimal import Decimal

if TYPE_CHECKING:
    from .category import CategoryTable


class ProductTable(SQLModel, table=True):
    __tablename__ = "products"

    id: str = Field(primary_key=True)
    name: str = Field(index=True)
    slug: str = Field(unique=True, index=True)

    price: Decimal = Field(max_digits=12, decimal_places=2)

    category_id: Optional[str] = Field(default=None, foreign_key="categories.id", index=True)

    is_active: bool = Field(default=True)

    created_at: datetime = Field(default_factory=datetime.utcnow)

    # Relationships
    category: Optional["CategoryTable"] = Relationship(back_populates="products")
