from .category import CategoryTable
from .product import ProductTable

__all__ = [
    "CategoryTable",
    "ProductTable",
]
