"""Cart services: session cart mutations with stock checks."""

import logging

from catalog.models import Product
from django.db import transaction
from django.shortcuts import get_object_or_404

from .models import Cart, CartItem
from .selectors import get_or_create_cart


class CartError(Exception):
    """Raised for cart mutation failures."""


class InsufficientCartStockError(CartError):
    def __init__(self, available: int):
        self.available = available
        super().__init__(f"Stock insuficiente. Disponible: {available}")


logger = logging.getLogger("katsuda.cart")


def _check_stock(product: Product, quantity: int) -> None:
    if product.stock < quantity:
        raise InsufficientCartStockError(available=product.stock)


@transaction.atomic
def add_item(*, session_id: str, product_id: int, quantity: int = 1) -> CartItem:
    """Add a product to the session cart, merging into an existing line.

    The stock check applies to the resulting line quantity.
    """

    if quantity <= 0:
        raise CartError("Quantity must be positive")
    cart = get_or_create_cart(session_id=session_id)
    product = get_object_or_404(Product, id=product_id, is_active=True)

    try:
        item = CartItem.objects.select_for_update().get(cart=cart, product=product)
        new_quantity = item.quantity + quantity
        _check_stock(product, new_quantity)
        item.quantity = new_quantity
        item.save(update_fields=["quantity", "updated_at"])
        event = "cart.item_updated"
    except CartItem.DoesNotExist:
        _check_stock(product, quantity)
        item = CartItem.objects.create(cart=cart, product=product, quantity=quantity)
        event = "cart.item_added"

    logger.info(
        event,
        extra={
            "event": event,
            "cart_id": cart.id,
            "session_id": session_id,
            "product_id": product.id,
            "quantity": item.quantity,
        },
    )
    return item


@transaction.atomic
def update_item_quantity(*, session_id: str, item_id: int, quantity: int) -> CartItem | None:
    """Set a line's quantity; zero removes the line and returns None."""

    if quantity < 0:
        raise CartError("Quantity must not be negative")
    cart = get_or_create_cart(session_id=session_id)
    item = get_object_or_404(CartItem.objects.select_for_update().select_related("product"), id=item_id, cart=cart)

    if quantity == 0:
        item.delete()
        logger.info(
            "cart.item_removed",
            extra={"event": "cart.item_removed", "cart_id": cart.id, "session_id": session_id, "item_id": item_id},
        )
        return None

    _check_stock(item.product, quantity)
    item.quantity = quantity
    item.save(update_fields=["quantity", "updated_at"])
    logger.info(
        "cart.item_updated",
        extra={
            "event": "cart.item_updated",
            "cart_id": cart.id,
            "session_id": session_id,
            "product_id": item.product_id,
            "quantity": quantity,
        },
    )
    return item


@transaction.atomic
def remove_item(*, session_id: str, item_id: int) -> None:
    cart = get_or_create_cart(session_id=session_id)
    item = get_object_or_404(CartItem, id=item_id, cart=cart)
    item.delete()
    logger.info(
        "cart.item_removed",
        extra={"event": "cart.item_removed", "cart_id": cart.id, "session_id": session_id, "item_id": item_id},
    )


@transaction.atomic
def clear_cart(*, session_id: str) -> Cart:
    """Delete every line of the session cart; the cart itself is kept."""

    cart = get_or_create_cart(session_id=session_id)
    CartItem.objects.filter(cart=cart).delete()
    logger.info(
        "cart.cleared",
        extra={"event": "cart.cleared", "cart_id": cart.id, "session_id": session_id},
    )
    return cart
