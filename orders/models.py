from decimal import Decimal

from common.choices import OrderStatus, PaymentMethod, PaymentStatus, ShippingMethod
from common.models import TimeStampedModel
from django.conf import settings
from django.db import models


class Order(TimeStampedModel):
    """Purchase order created once per checkout.

    Totals are computed at checkout and stored; they are never recomputed.
    Guest contact fields are filled for storefront orders without an account.
    """

    STATUS_PENDING = OrderStatus.PENDING
    STATUS_CONFIRMED = OrderStatus.CONFIRMED
    STATUS_PROCESSING = OrderStatus.PROCESSING
    STATUS_SHIPPED = OrderStatus.SHIPPED
    STATUS_DELIVERED = OrderStatus.DELIVERED
    STATUS_CANCELLED = OrderStatus.CANCELLED
    STATUS_CHOICES = OrderStatus.choices

    number = models.CharField(max_length=32, unique=True)
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True)
    payment_method = models.CharField(max_length=16, choices=PaymentMethod.choices)
    payment_status = models.CharField(
        max_length=16, choices=PaymentStatus.choices, default=PaymentStatus.PENDING, db_index=True
    )
    shipping_method = models.CharField(max_length=16, choices=ShippingMethod.choices, default=ShippingMethod.PICKUP)

    subtotal = models.DecimalField(max_digits=12, decimal_places=2)
    shipping = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    discount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    total = models.DecimalField(max_digits=12, decimal_places=2)

    customer = models.ForeignKey(
        settings.AUTH_USER_MODEL, null=True, blank=True, related_name="orders", on_delete=models.SET_NULL
    )
    guest_email = models.EmailField(blank=True)
    guest_name = models.CharField(max_length=200, blank=True)
    guest_phone = models.CharField(max_length=40, blank=True)

    shipping_street = models.CharField(max_length=200, blank=True)
    shipping_number = models.CharField(max_length=20, blank=True)
    shipping_floor = models.CharField(max_length=20, blank=True)
    shipping_apartment = models.CharField(max_length=20, blank=True)
    shipping_city = models.CharField(max_length=120, blank=True)
    shipping_province = models.CharField(max_length=120, blank=True)
    shipping_postal_code = models.CharField(max_length=16, blank=True)

    notes = models.TextField(blank=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["status", "created_at"], name="orders_status_created_idx"),
        ]
        constraints = [
            models.CheckConstraint(name="order_total_non_negative", condition=models.Q(total__gte=0)),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"Order {self.number} status={self.status}"

    @property
    def shipping_address(self) -> dict | None:
        if self.shipping_method != ShippingMethod.DELIVERY:
            return None
        return {
            "street": self.shipping_street,
            "number": self.shipping_number,
            "floor": self.shipping_floor or None,
            "apartment": self.shipping_apartment or None,
            "city": self.shipping_city,
            "province": self.shipping_province,
            "postal_code": self.shipping_postal_code,
        }


class OrderItem(TimeStampedModel):
    """Line item within an order.

    Snapshots product name, SKU and unit price so later catalog changes do
    not alter the order.
    """

    order = models.ForeignKey(Order, related_name="items", on_delete=models.CASCADE)
    product = models.ForeignKey(
        "catalog.Product", null=True, blank=True, related_name="order_items", on_delete=models.SET_NULL
    )
    product_name = models.CharField(max_length=200)
    product_sku = models.CharField(max_length=64)
    quantity = models.PositiveIntegerField(default=1)
    unit_price = models.DecimalField(max_digits=12, decimal_places=2)
    line_total = models.DecimalField(max_digits=12, decimal_places=2)

    class Meta:
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(name="orderitem_price_non_negative", condition=models.Q(unit_price__gte=0)),
            models.CheckConstraint(name="orderitem_quantity_positive", condition=models.Q(quantity__gte=1)),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"OrderItem#{self.id} order={self.order_id} product={self.product_id} qty={self.quantity}"


class OrderSequence(models.Model):
    """Per-prefix, per-day counter backing order numbers.

    ``last_value`` is the sequence most recently handed out for ``prefix`` on
    ``day`` (UTC).
    """

    prefix = models.CharField(max_length=16, default="KAT")
    day = models.DateField()
    last_value = models.PositiveIntegerField(default=0)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["prefix", "day"], name="uniq_order_sequence_prefix_day"),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.prefix}:{self.day.isoformat()}:{self.last_value}"


class IdempotencyKey(TimeStampedModel):
    """Stores checkout responses so a retried submission does not create a second order."""

    key = models.CharField(max_length=128)
    scope = models.CharField(max_length=128)
    path = models.CharField(max_length=255)
    method = models.CharField(max_length=16)
    request_hash = models.CharField(max_length=64, null=True, blank=True)
    response_code = models.IntegerField(null=True, blank=True)
    response_json = models.JSONField(null=True, blank=True)
    expires_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["key", "scope", "path", "method"], name="uniq_idem_scope_path_method"),
        ]
