from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel
from typing import Optional
from decimal import Decimal
from datetime import datetime, timezone


class ProductResponse(BaseModel):
    """Product card as listed under a category"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        frozen=True,
    )

    id: str
    name: str
    slug: str
    price: Decimal
    category_id: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None

    @field_validator("created_at")
    @classmethod
    def assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
