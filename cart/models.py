"""Cart app models.

Carts belong to a browser session identified by an opaque ``session_id``;
no user account is needed. One cart per session, one line per product.
"""

from decimal import Decimal

from common.models import TimeStampedModel
from django.db import models


class Cart(TimeStampedModel):
    """Shopping cart bound to a browser session."""

    session_id = models.CharField(max_length=64, unique=True)

    class Meta:
        ordering = ["-updated_at"]

    def __str__(self) -> str:  # pragma: no cover
        return f"Cart#{self.id} ({self.session_id})"


class CartItem(TimeStampedModel):
    """Line item in a shopping cart for a product."""

    cart = models.ForeignKey(Cart, related_name="items", on_delete=models.CASCADE)
    product = models.ForeignKey("catalog.Product", related_name="cart_items", on_delete=models.CASCADE)
    quantity = models.PositiveIntegerField(default=1)

    class Meta:
        ordering = ["id"]
        constraints = [
            models.UniqueConstraint(fields=["cart", "product"], name="unique_product_per_cart"),
            models.CheckConstraint(name="cartitem_quantity_positive", condition=models.Q(quantity__gte=1)),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"CartItem#{self.id} cart={self.cart_id} product={self.product_id} qty={self.quantity}"

    @property
    def unit_price(self) -> Decimal:
        return self.product.price

    @property
    def line_total(self) -> Decimal:
        return self.product.price * Decimal(int(self.quantity))
