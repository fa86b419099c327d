"""Selectors for read-only cart queries."""

from common.choices import PaymentMethod
from common.pricing import ZERO, round_currency, unit_price_for

from .models import Cart


def get_or_create_cart(*, session_id: str) -> Cart:
    """Return the session's cart, creating it if missing."""

    cart, _ = Cart.objects.get_or_create(session_id=session_id)
    return cart


def cart_items(*, cart: Cart):
    return cart.items.select_related("product", "product__brand").order_by("id")


def cart_summary(*, cart: Cart) -> dict:
    """Compute list and transfer subtotals for the cart.

    Both use the unit price checkout would charge for that payment method, so
    the transfer subtotal reflects each product's own transfer price.
    """

    items = list(cart_items(cart=cart))
    subtotal = ZERO
    transfer_subtotal = ZERO
    item_count = 0
    for item in items:
        subtotal += unit_price_for(item.product, PaymentMethod.CASH) * item.quantity
        transfer_subtotal += unit_price_for(item.product, PaymentMethod.TRANSFER) * item.quantity
        item_count += item.quantity
    return {
        "id": cart.id,
        "session_id": cart.session_id,
        "items": items,
        "item_count": item_count,
        "subtotal": round_currency(subtotal),
        "transfer_subtotal": round_currency(transfer_subtotal),
    }
