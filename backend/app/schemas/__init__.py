from .category import (
    Category, CategoryCreate, CategoryPatch, CategoryUpdate,
    CategoryTreeNode, CategoryResponse, CategoryListResponse, CategoryTreeResponse,
    CategoryProductsResponse,
)
from .product import ProductResponse

__all__ = [
    "Category", "CategoryCreate", "CategoryPatch", "CategoryUpdate",
    "CategoryTreeNode", "CategoryResponse", "CategoryListResponse", "CategoryTreeResponse",
    "CategoryProductsResponse",
    "ProductResponse",
]
