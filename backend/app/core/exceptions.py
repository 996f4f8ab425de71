"""
Typed errors raised by the category contracts and stores.

The API layer maps each kind to a status code and a ``{message, field?}`` body.
"""
from typing import Any, Dict, Optional


class CategoryError(Exception):
    """Base class for every recoverable catalog error."""

    field: Optional[str] = None

    def __init__(self, message: str = "Category error"):
        self.message = message
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"message": self.message}
        if self.field is not None:
            body["field"] = self.field
        return body


class ValidationError(CategoryError):
    """A record violates a required-field, type or format invariant."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"{field}: {reason}")


class DuplicateSlugError(CategoryError):
    """Create/update would give two categories the same slug."""

    def __init__(self, slug: str):
        self.slug = slug
        self.field = "slug"
        super().__init__(f"Slug already exists: {slug}")


class NotFoundError(CategoryError):
    """No category has the requested id."""

    def __init__(self, id: str):
        self.id = id
        super().__init__(f"Category not found: {id}")


class CategoryInUseError(CategoryError):
    """Physical delete refused while products still reference the category."""

    def __init__(self, id: str, product_count: int):
        self.id = id
        self.product_count = product_count
        super().__init__(
            f"Cannot delete category with {product_count} products. "
            "Please move or delete products first."
        )


class HasSubcategoriesError(CategoryError):
    """Physical delete refused while other categories name this one as parent."""

    def __init__(self, id: str, subcategory_count: int):
        self.id = id
        self.subcategory_count = subcategory_count
        super().__init__(
            f"Cannot delete category with {subcategory_count} subcategories. "
            "Please delete subcategories first."
        )
