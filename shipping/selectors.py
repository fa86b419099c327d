"""Selectors for read-only shipping zone queries."""

from typing import Optional

from django.db.models import QuerySet

from .models import ShippingZone


def list_active_zones() -> QuerySet[ShippingZone]:
    return ShippingZone.objects.filter(is_active=True).order_by("name")


def find_zone_for_province(province: str) -> Optional[ShippingZone]:
    """Return the first active zone whose province contains ``province``.

    Matching is a case-insensitive substring test, so "mendoza" finds "Mendoza".
    """

    if not province or not province.strip():
        return None
    return (
        ShippingZone.objects.filter(is_active=True, province__icontains=province.strip())
        .order_by("id")
        .first()
    )


def find_zone_by_name(name: str) -> Optional[ShippingZone]:
    """Return the first active zone whose name contains ``name`` (case-insensitive)."""

    if not name:
        return None
    return ShippingZone.objects.filter(is_active=True, name__icontains=name).order_by("id").first()
