"""
Fixed catalog used when no database is wired up (local development, UI
prototyping, tests).

The sequences are read-only: records are frozen and held in tuples.
Anything that mutates categories works on ``seed_categories()``, which
hands out a new list each call.
"""
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import List

from app.schemas.category import Category
from app.schemas.product import ProductResponse


SEED_TIMESTAMP = "2024-01-01T00:00:00Z"
# Products are listed one hour apart, in row order
_PRODUCTS_START = datetime(2024, 1, 1, tzinfo=timezone.utc)

_CATEGORY_RECORDS = [
    {
        "id": "1",
        "name": "Áo",
        "nameEn": "Tops",
        "nameJa": "トップス",
        "description": "Các loại áo thời trang Nhật Bản",
        "descriptionEn": "Japanese fashion tops",
        "descriptionJa": "日本のファッショントップス",
        "image": "/placeholder.svg",
        "slug": "tops",
        "isActive": True,
        "createdAt": SEED_TIMESTAMP,
        "updatedAt": SEED_TIMESTAMP,
        "productCount": 8,
    },
    {
        "id": "2",
        "name": "Quần",
        "nameEn": "Bottoms",
        "nameJa": "ボトムス",
        "description": "Các loại quần thời trang Nhật Bản",
        "descriptionEn": "Japanese fashion bottoms",
        "descriptionJa": "日本のファッションボトムス",
        "image": "/placeholder.svg",
        "slug": "bottoms",
        "isActive": True,
        "createdAt": SEED_TIMESTAMP,
        "updatedAt": SEED_TIMESTAMP,
        "productCount": 6,
    },
    {
        "id": "3",
        "name": "Phụ kiện",
        "nameEn": "Accessories",
        "nameJa": "アクセサリー",
        "description": "Phụ kiện thời trang Nhật Bản",
        "descriptionEn": "Japanese fashion accessories",
        "descriptionJa": "日本のファッションアクセサリー",
        "image": "/placeholder.svg",
        "slug": "accessories",
        "isActive": True,
        "createdAt": SEED_TIMESTAMP,
        "updatedAt": SEED_TIMESTAMP,
        "productCount": 4,
    },
    {
        "id": "4",
        "name": "Kimono",
        "nameEn": "Kimono",
        "nameJa": "着物",
        "description": "Trang phục truyền thống Kimono",
        "descriptionEn": "Traditional Kimono attire",
        "descriptionJa": "伝統的な着物",
        "image": "/placeholder.svg",
        "slug": "kimono",
        "isActive": True,
        "createdAt": SEED_TIMESTAMP,
        "updatedAt": SEED_TIMESTAMP,
        "productCount": 3,
    },
    {
        "id": "5",
        "name": "Yukata",
        "nameEn": "Yukata",
        "nameJa": "浴衣",
        "description": "Trang phục mùa hè Yukata",
        "descriptionEn": "Summer Yukata attire",
        "descriptionJa": "夏の浴衣",
        "image": "/placeholder.svg",
        "slug": "yukata",
        "isActive": True,
        "createdAt": SEED_TIMESTAMP,
        "updatedAt": SEED_TIMESTAMP,
        "productCount": 2,
    },
]

# (slug, name, price, category id)
_PRODUCT_ROWS = [
    ("linen-shirt", "Linen Shirt", "450000", "1"),
    ("oversized-tee", "Oversized Tee", "290000", "1"),
    ("kimono-cardigan", "Kimono Cardigan", "690000", "1"),
    ("haori-jacket", "Haori Jacket", "890000", "1"),
    ("sailor-blouse", "Sailor Blouse", "520000", "1"),
    ("cotton-hoodie", "Cotton Hoodie", "610000", "1"),
    ("striped-polo", "Striped Polo", "380000", "1"),
    ("knit-vest", "Knit Vest", "430000", "1"),
    ("wide-leg-pants", "Wide Leg Pants", "560000", "2"),
    ("hakama-trousers", "Hakama Trousers", "990000", "2"),
    ("pleated-skirt", "Pleated Skirt", "470000", "2"),
    ("denim-shorts", "Denim Shorts", "350000", "2"),
    ("cargo-pants", "Cargo Pants", "590000", "2"),
    ("linen-culottes", "Linen Culottes", "490000", "2"),
    ("furoshiki-wrap", "Furoshiki Wrap", "180000", "3"),
    ("tabi-socks", "Tabi Socks", "120000", "3"),
    ("kanzashi-hairpin", "Kanzashi Hairpin", "250000", "3"),
    ("obi-belt", "Obi Belt", "320000", "3"),
    ("furisode-kimono", "Furisode Kimono", "4500000", "4"),
    ("houmongi-kimono", "Houmongi Kimono", "3200000", "4"),
    ("komon-kimono", "Komon Kimono", "2100000", "4"),
    ("indigo-yukata", "Indigo Yukata", "1100000", "5"),
    ("sakura-yukata", "Sakura Yukata", "1250000", "5"),
]

SEED_CATEGORIES = tuple(Category.model_validate(record) for record in _CATEGORY_RECORDS)

SEED_PRODUCTS = tuple(
    ProductResponse(
        id=f"p{index}",
        name=name,
        slug=slug,
        price=Decimal(price),
        category_id=category_id,
        created_at=_PRODUCTS_START + timedelta(hours=index),
    )
    for index, (slug, name, price, category_id) in enumerate(_PRODUCT_ROWS, start=1)
)


def seed_categories() -> List[Category]:
    return list(SEED_CATEGORIES)


def seed_products() -> List[ProductResponse]:
    return list(SEED_PRODUCTS)
