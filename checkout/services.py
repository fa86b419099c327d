"""Checkout: turn a session cart into a persisted order.

``CheckoutService.place_order`` validates the request, loads the cart, checks
stock for every line, prices the order and then writes it in one atomic unit:
order number, order row and items, stock decrements and cart clearing. Any
failure in that unit rolls all of it back.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional

from common.choices import PaymentMethod, ShippingMethod
from common.pricing import ZERO, unit_price_for
from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import validate_email
from django.db import DatabaseError, transaction
from orders.emails import send_order_created_email
from orders.numbering import OrderNumberError
from shipping.services import delivery_cost

from .stores import (
    CartStore,
    DjangoCartStore,
    DjangoOrderStore,
    DjangoProductStore,
    DjangoZoneStore,
    NewOrder,
    NewOrderItem,
    OrderStore,
    ProductStore,
    ShippingAddress,
    ZoneStore,
)

logger = logging.getLogger("katsuda.checkout")

ADDRESS_REQUIRED_FIELDS = ("street", "number", "city", "province", "postal_code")

# Order.guest_name holds "first last"
GUEST_NAME_MAX_LENGTH = 200


class CheckoutError(Exception):
    """Base class for checkout failures. ``kind`` is the stable error code."""

    kind = "checkout_error"


class CheckoutValidationError(CheckoutError):
    kind = "validation_error"

    def __init__(self, fields: Dict[str, str]):
        self.fields = fields
        super().__init__("Datos de checkout inválidos: " + ", ".join(sorted(fields)))


class EmptyCartError(CheckoutError):
    kind = "empty_cart"

    def __init__(self):
        super().__init__("El carrito está vacío")


class InsufficientStockError(CheckoutError):
    kind = "insufficient_stock"

    def __init__(self, items: List[dict]):
        self.items = items
        super().__init__("Stock insuficiente para algunos productos")


class TransactionFailure(CheckoutError):
    kind = "transaction_failure"

    def __init__(self, message: str = "No se pudo completar el pedido. Intente nuevamente."):
        super().__init__(message)


@dataclass(frozen=True)
class Contact:
    email: str
    first_name: str
    last_name: str
    phone: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class CheckoutRequest:
    session_id: str
    contact: Contact
    payment_method: str
    shipping_method: str = ShippingMethod.PICKUP
    address: Optional[ShippingAddress] = None
    notes: str = ""


@dataclass
class PlacedOrder:
    order: Any
    items: List[NewOrderItem] = field(default_factory=list)
    contact: Optional[Contact] = None
    shipping_address: Optional[ShippingAddress] = None

    @property
    def number(self) -> str:
        return self.order.number


def _blank(value) -> bool:
    return value is None or not str(value).strip()


def validate_request(request: CheckoutRequest) -> None:
    """Raise ``CheckoutValidationError`` listing every missing or invalid field."""

    errors: Dict[str, str] = {}
    contact = request.contact

    if _blank(contact.email):
        errors["email"] = "Requerido"
    else:
        try:
            validate_email(contact.email.strip())
        except DjangoValidationError:
            errors["email"] = "Email inválido"
    if _blank(contact.first_name):
        errors["first_name"] = "Requerido"
    if _blank(contact.last_name):
        errors["last_name"] = "Requerido"
    names_given = "first_name" not in errors and "last_name" not in errors
    if names_given and len(contact.full_name) > GUEST_NAME_MAX_LENGTH:
        errors["last_name"] = f"Nombre y apellido no pueden superar {GUEST_NAME_MAX_LENGTH} caracteres"

    if _blank(request.payment_method):
        errors["payment_method"] = "Requerido"
    elif request.payment_method not in PaymentMethod.values:
        errors["payment_method"] = "Método de pago inválido"

    if request.shipping_method not in ShippingMethod.values:
        errors["shipping_method"] = "Método de envío inválido"
    elif request.shipping_method == ShippingMethod.DELIVERY:
        address = request.address
        for name in ADDRESS_REQUIRED_FIELDS:
            if address is None or _blank(getattr(address, name)):
                errors[name] = "Requerido para envío a domicilio"

    if errors:
        raise CheckoutValidationError(errors)


class CheckoutService:
    def __init__(
        self,
        carts: CartStore,
        products: ProductStore,
        zones: ZoneStore,
        orders: OrderStore,
        atomic: Callable[[], Any] = transaction.atomic,
        on_commit: Optional[Callable[[Callable[[], None]], None]] = transaction.on_commit,
    ):
        self.carts = carts
        self.products = products
        self.zones = zones
        self.orders = orders
        self.atomic = atomic
        self.on_commit = on_commit

    def shipping_for(self, request: CheckoutRequest, subtotal: Decimal) -> Decimal:
        if request.shipping_method != ShippingMethod.DELIVERY:
            return ZERO
        province = request.address.province.strip()
        return delivery_cost(self.zones.find_active_zone_by_province(province), subtotal, province=province)

    def place_order(self, request: CheckoutRequest, today: Optional[date] = None) -> PlacedOrder:
        validate_request(request)

        cart = self.carts.find_cart_by_session(request.session_id)
        if cart is None or not cart.lines:
            raise EmptyCartError()

        products = {}
        shortfalls = []
        for line in cart.lines:
            product = self.products.get_product(line.product_id)
            available = product.stock if product is not None else 0
            if product is None or line.quantity > available:
                shortfalls.append(
                    {
                        "product_id": line.product_id,
                        "name": product.name if product is not None else None,
                        "requested": line.quantity,
                        "available": available,
                    }
                )
                continue
            products[line.product_id] = product
        if shortfalls:
            logger.info(
                "checkout.insufficient_stock",
                extra={"event": "checkout.insufficient_stock", "cart_id": cart.id, "items": shortfalls},
            )
            raise InsufficientStockError(shortfalls)

        items = []
        subtotal = ZERO
        for line in cart.lines:
            product = products[line.product_id]
            unit_price = unit_price_for(product, request.payment_method)
            line_total = unit_price * line.quantity
            subtotal += line_total
            items.append(
                NewOrderItem(
                    product_id=product.id,
                    product_name=product.name,
                    product_sku=product.sku,
                    quantity=line.quantity,
                    unit_price=unit_price,
                    line_total=line_total,
                )
            )

        shipping = self.shipping_for(request, subtotal)
        discount = ZERO
        total = subtotal + shipping - discount
        contact = request.contact
        address = request.address if request.shipping_method == ShippingMethod.DELIVERY else None

        try:
            with self.atomic():
                number = self.orders.next_order_number(today)
                order = self.orders.insert_order(
                    NewOrder(
                        number=number,
                        payment_method=request.payment_method,
                        shipping_method=request.shipping_method,
                        subtotal=subtotal,
                        shipping=shipping,
                        discount=discount,
                        total=total,
                        guest_email=contact.email.strip().lower(),
                        guest_name=contact.full_name,
                        guest_phone=(contact.phone or "").strip(),
                        notes=(request.notes or "").strip(),
                        address=address,
                    ),
                    items,
                )
                for item in items:
                    if not self.products.decrement_stock(item.product_id, item.quantity):
                        # Stock moved since the check above
                        current = self.products.get_product(item.product_id)
                        raise InsufficientStockError(
                            [
                                {
                                    "product_id": item.product_id,
                                    "name": item.product_name,
                                    "requested": item.quantity,
                                    "available": current.stock if current is not None else 0,
                                }
                            ]
                        )
                self.carts.delete_cart_items(cart.id)
        except (DatabaseError, OrderNumberError) as exc:
            logger.exception(
                "checkout.transaction_failed",
                extra={"event": "checkout.transaction_failed", "cart_id": cart.id},
            )
            raise TransactionFailure() from exc

        logger.info(
            "order_created",
            extra={
                "event": "order_created",
                "order_number": order.number,
                "cart_id": cart.id,
                "payment_method": request.payment_method,
                "shipping_method": request.shipping_method,
                "subtotal": str(subtotal),
                "shipping": str(shipping),
                "total": str(total),
                "item_count": sum(item.quantity for item in items),
            },
        )
        if self.on_commit is not None:
            self.on_commit(lambda: send_order_created_email(order))

        return PlacedOrder(order=order, items=items, contact=contact, shipping_address=address)


def default_checkout_service() -> CheckoutService:
    return CheckoutService(
        carts=DjangoCartStore(),
        products=DjangoProductStore(),
        zones=DjangoZoneStore(),
        orders=DjangoOrderStore(),
    )
