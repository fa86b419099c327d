"""Shipping app models."""

from common.models import TimeStampedModel
from django.db import models


class ShippingZone(TimeStampedModel):
    """Delivery zone with a flat price and an optional free-shipping minimum.

    ``cities`` is informational only; lookups go by province or zone name.
    """

    name = models.CharField(max_length=120)
    province = models.CharField(max_length=120, db_index=True)
    cities = models.JSONField(default=list, blank=True)
    price = models.DecimalField(max_digits=12, decimal_places=2)
    min_free = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    is_active = models.BooleanField(default=True, db_index=True)

    class Meta:
        ordering = ["province", "name"]
        constraints = [
            models.CheckConstraint(name="zone_price_non_negative", condition=models.Q(price__gte=0)),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.name} ({self.province})"
