"""Selectors for the catalog domain.

Expose read-only query helpers to keep views thin and allow reuse across
APIs and services. Selectors should return querysets or lightweight data
structures and avoid side effects.
"""

from decimal import Decimal, InvalidOperation
from typing import Iterable, Optional

from django.db.models import Q, QuerySet

from .models import Brand, Category, Product

PRODUCT_SORTS = {
    "newest": ("-created_at", "id"),
    "price_asc": ("price", "id"),
    "price_desc": ("-price", "id"),
    "name_asc": ("name", "id"),
    "name_desc": ("-name", "id"),
}


def list_categories(ordering: Optional[Iterable[str]] = None) -> QuerySet[Category]:
    """Return active categories ordered by the provided fields.

    Defaults to sorting by ``sort_order`` then ``name``.
    """

    ordering = list(ordering or ("sort_order", "name"))
    return Category.objects.filter(is_active=True).order_by(*ordering)


def list_brands() -> QuerySet[Brand]:
    return Brand.objects.filter(is_active=True).order_by("name")


def _parse_decimal(value) -> Optional[Decimal]:
    if value in (None, ""):
        return None
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None


def list_products(
    *,
    category_slug: Optional[str] = None,
    brand_slug: Optional[str] = None,
    price_min=None,
    price_max=None,
    in_stock: bool = False,
    free_shipping: bool = False,
    search: Optional[str] = None,
    sort: Optional[str] = None,
) -> QuerySet[Product]:
    """Return active products with storefront filters applied.

    A category filter also matches products in its direct subcategories.
    Unknown category or brand slugs are ignored rather than emptying the list.
    """

    qs = Product.objects.filter(is_active=True).select_related("brand", "category")

    if category_slug:
        category = Category.objects.filter(slug=category_slug).first()
        if category is not None:
            ids = [category.id, *category.children.values_list("id", flat=True)]
            qs = qs.filter(category_id__in=ids)
    if brand_slug:
        brand = Brand.objects.filter(slug=brand_slug).first()
        if brand is not None:
            qs = qs.filter(brand=brand)

    low = _parse_decimal(price_min)
    if low is not None:
        qs = qs.filter(price__gte=low)
    high = _parse_decimal(price_max)
    if high is not None:
        qs = qs.filter(price__lte=high)
    if in_stock:
        qs = qs.filter(stock__gt=0)
    if free_shipping:
        qs = qs.filter(free_shipping=True)
    if search:
        qs = qs.filter(Q(name__icontains=search) | Q(sku__icontains=search) | Q(description__icontains=search))

    return qs.order_by(*PRODUCT_SORTS.get(sort or "newest", PRODUCT_SORTS["newest"]))


def list_featured_products(limit: int = 8) -> QuerySet[Product]:
    qs = Product.objects.filter(is_active=True, is_featured=True).select_related("brand", "category")
    return qs.order_by("-created_at")[:limit]


def get_product_by_slug(slug: str) -> Optional[Product]:
    """Return a single active product by slug, or None if not found."""

    try:
        return Product.objects.select_related("brand", "category").get(slug=slug, is_active=True)
    except Product.DoesNotExist:
        return None
