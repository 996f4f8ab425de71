"""
Category contracts: invariant checks, create/update handling, product counts.

Every function here is pure. Create and update work on a snapshot of the
current category set supplied by the caller; the store that owns the data
serializes writers so that the snapshot stays consistent while a request
is applied.
"""
import re
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from pydantic import TypeAdapter, ValidationError as SchemaError
from pydantic.alias_generators import to_camel

from app.core.exceptions import ValidationError, DuplicateSlugError, NotFoundError
from app.schemas.category import Category, CategoryCreate, CategoryUpdate, CategoryTreeNode


PLACEHOLDER_IMAGE = "/placeholder.svg"

SLUG_PATTERN = re.compile(r"[a-z0-9-]+")

REQUIRED_TEXT_FIELDS = ("id", "name", "slug")
OPTIONAL_TEXT_FIELDS = (
    "name_en", "name_ja",
    "description", "description_en", "description_ja",
    "image", "parent_id",
)
# Fields a caller may change; id, timestamps and product_count are server-owned
MUTABLE_FIELDS = tuple(CategoryCreate.model_fields)

CategoryRecord = Union[Category, Mapping[str, Any]]

_timestamp_adapter = TypeAdapter(datetime)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_category_id() -> str:
    return uuid.uuid4().hex


def slugify(text: str) -> str:
    """Candidate slug for a display name: 'Summer Yukata' -> 'summer-yukata'"""
    slug = re.sub(r"[^a-z0-9 -]", "", text.lower())
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")


def _field_dict(record: CategoryRecord) -> Dict[str, Any]:
    if isinstance(record, Category):
        return record.model_dump()

    data = {}
    for name in Category.model_fields:
        alias = to_camel(name)
        if alias in record:
            data[name] = record[alias]
        elif name in record:
            data[name] = record[name]
    return data


def _parse_timestamp(field: str, value: Any) -> datetime:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(to_camel(field), "is required")
    if not isinstance(value, (str, datetime)):
        raise ValidationError(to_camel(field), "must be an ISO-8601 timestamp")

    try:
        parsed = _timestamp_adapter.validate_python(value)
    except SchemaError as exc:
        raise ValidationError(to_camel(field), "must be an ISO-8601 timestamp") from exc

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def validate(record: CategoryRecord) -> Category:
    """
    Check a category against its invariants and return it as a ``Category``.

    Accepts a ``Category`` or a mapping with camelCase or snake_case keys.
    Raises ``ValidationError`` naming the first offending field.
    """
    data = _field_dict(record)

    for field in REQUIRED_TEXT_FIELDS:
        value = data.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError(field, "is required")
        if not isinstance(value, str):
            raise ValidationError(field, "must be text")

    is_active = data.get("is_active")
    if is_active is None:
        raise ValidationError("isActive", "is required")
    if not isinstance(is_active, bool):
        raise ValidationError("isActive", "must be a boolean")

    created_at = _parse_timestamp("created_at", data.get("created_at"))
    updated_at = _parse_timestamp("updated_at", data.get("updated_at"))

    if not SLUG_PATTERN.fullmatch(data["slug"]):
        raise ValidationError(
            "slug", "must contain only lowercase letters, digits and hyphens"
        )

    if created_at > updated_at:
        raise ValidationError("updatedAt", "must not be earlier than createdAt")

    for field in OPTIONAL_TEXT_FIELDS:
        value = data.get(field)
        if value is not None and not isinstance(value, str):
            raise ValidationError(to_camel(field), "must be text")

    product_count = data.get("product_count")
    if product_count is not None:
        if isinstance(product_count, bool) or not isinstance(product_count, int):
            raise ValidationError("productCount", "must be an integer")
        if product_count < 0:
            raise ValidationError("productCount", "must not be negative")

    if data.get("parent_id") == data["id"]:
        raise ValidationError("parentId", "category cannot be its own parent")

    data["created_at"] = created_at
    data["updated_at"] = updated_at
    try:
        return Category.model_validate(data)
    except SchemaError as exc:
        error = exc.errors()[0]
        field = to_camel(str(error["loc"][0])) if error["loc"] else "category"
        raise ValidationError(field, error["msg"]) from exc


def is_visible(category: Category) -> bool:
    return category.is_active


def visible(categories: Iterable[Category]) -> List[Category]:
    return [category for category in categories if is_visible(category)]


def find_by_id(categories: Iterable[Category], id: str) -> Optional[Category]:
    return next((c for c in categories if c.id == id), None)


def find_by_slug(categories: Iterable[Category], slug: str) -> Optional[Category]:
    return next((c for c in categories if c.slug == slug), None)


def ensure_slug_available(
    slug: str,
    existing: Iterable[Category],
    exclude_id: Optional[str] = None,
):
    for category in existing:
        if category.slug == slug and category.id != exclude_id:
            raise DuplicateSlugError(slug)


def ensure_valid_parent(category: Category, existing: Sequence[Category]):
    """The parent must exist and must not sit below ``category`` in the tree"""
    if category.parent_id is None:
        return

    parent = find_by_id(existing, category.parent_id)
    if parent is None:
        raise ValidationError("parentId", "parent category not found")

    seen = set()
    while parent is not None and parent.id not in seen:
        if parent.id == category.id:
            raise ValidationError("parentId", "cannot set a descendant category as parent")
        seen.add(parent.id)
        parent = find_by_id(existing, parent.parent_id) if parent.parent_id else None


def subcategories(categories: Iterable[Category], parent_id: Optional[str]) -> List[Category]:
    """Direct children of ``parent_id`` (roots when ``None``), ordered by name"""
    children = [c for c in categories if c.parent_id == parent_id]
    return sorted(children, key=lambda c: c.name)


def build_tree(
    categories: Iterable[Category],
    parent_id: Optional[str] = None,
) -> List[CategoryTreeNode]:
    """
    Nest categories under their parents, starting from ``parent_id``.

    Categories whose parent is missing from ``categories`` are left out
    together with their branch.
    """
    categories = list(categories)
    return [
        CategoryTreeNode(
            **category.model_dump(),
            children=build_tree(categories, category.id),
        )
        for category in subcategories(categories, parent_id)
    ]


def build_category(
    request: CategoryCreate,
    existing: Sequence[Category],
    *,
    now: Optional[datetime] = None,
    new_id: Optional[str] = None,
    default_image: str = PLACEHOLDER_IMAGE,
) -> Category:
    """Turn a create request into a new category, assigning the server-owned fields"""
    now = now or utcnow()
    record = request.model_dump()
    record.update(
        id=new_id or new_category_id(),
        created_at=now,
        updated_at=now,
        product_count=0,
    )
    if not record.get("image"):
        record["image"] = default_image

    category = validate(record)
    if find_by_id(existing, category.id) is not None:
        raise ValidationError("id", "must be unique")
    ensure_slug_available(category.slug, existing)
    ensure_valid_parent(category, existing)
    return category


def overlay(current: Category, changes: Mapping[str, Any]) -> Dict[str, Any]:
    """Copy ``current`` field by field, replacing only the mutable fields present in ``changes``"""
    merged = current.model_dump()
    for field in MUTABLE_FIELDS:
        if field in changes:
            merged[field] = changes[field]
    return merged


def apply_update(
    request: CategoryUpdate,
    existing: Sequence[Category],
    *,
    now: Optional[datetime] = None,
) -> Category:
    """
    Merge a partial update into the category it targets.

    Only fields explicitly set on ``request`` are applied. The stored record
    is left untouched; the merged result is returned only if it validates.
    """
    current = find_by_id(existing, request.id)
    if current is None:
        raise NotFoundError(request.id)

    changes = {
        field: getattr(request, field)
        for field in request.model_fields_set
        if field != "id"
    }

    new_slug = changes.get("slug")
    if new_slug is not None and new_slug != current.slug:
        ensure_slug_available(new_slug, existing, exclude_id=current.id)

    merged = overlay(current, changes)
    stamp = now or utcnow()
    if stamp <= current.updated_at:
        stamp = current.updated_at + timedelta(microseconds=1)
    merged["updated_at"] = stamp

    category = validate(merged)
    ensure_valid_parent(category, existing)
    return category


def count_products(category_id: str, products: Iterable[Any]) -> int:
    """Number of products whose ``category_id`` points at the category"""
    return sum(1 for product in products if product.category_id == category_id)


def with_product_count(category: Category, products: Iterable[Any]) -> Category:
    return category.model_copy(
        update={"product_count": count_products(category.id, products)}
    )


def refresh_product_counts(
    categories: Iterable[Category],
    products: Iterable[Any],
) -> List[Category]:
    products = list(products)
    return [with_product_count(category, products) for category in categories]
