"""Storage collaborators used by the checkout service.

Each store is a small ``Protocol`` so the service can run against the Django
ORM in production and against in-memory fakes in tests. Values crossing the
boundary are plain dataclasses, never model instances, except the order
returned by ``OrderStore.insert_order``.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, List, Optional, Protocol

from cart.models import Cart, CartItem
from catalog.models import Product
from django.db.models import F
from orders import numbering
from orders.models import Order, OrderItem
from shipping.selectors import find_zone_for_province


@dataclass(frozen=True)
class CartLine:
    product_id: int
    quantity: int


@dataclass(frozen=True)
class CartSnapshot:
    id: int
    session_id: str
    lines: List[CartLine] = field(default_factory=list)


@dataclass(frozen=True)
class ProductSnapshot:
    id: int
    sku: str
    name: str
    price: Decimal
    transfer_price: Optional[Decimal]
    stock: int


@dataclass(frozen=True)
class ShippingAddress:
    street: str
    number: str
    city: str
    province: str
    postal_code: str
    floor: Optional[str] = None
    apartment: Optional[str] = None


@dataclass(frozen=True)
class NewOrderItem:
    product_id: int
    product_name: str
    product_sku: str
    quantity: int
    unit_price: Decimal
    line_total: Decimal


@dataclass(frozen=True)
class NewOrder:
    number: str
    payment_method: str
    shipping_method: str
    subtotal: Decimal
    shipping: Decimal
    discount: Decimal
    total: Decimal
    guest_email: str
    guest_name: str
    guest_phone: str = ""
    notes: str = ""
    address: Optional[ShippingAddress] = None


class CartStore(Protocol):
    def find_cart_by_session(self, session_id: str) -> Optional[CartSnapshot]: ...

    def delete_cart_items(self, cart_id: int) -> None: ...


class ProductStore(Protocol):
    def get_product(self, product_id: int) -> Optional[ProductSnapshot]: ...

    def decrement_stock(self, product_id: int, quantity: int) -> bool:
        """Subtract ``quantity`` only if enough stock remains; False otherwise."""
        ...


class ZoneStore(Protocol):
    def find_active_zone_by_province(self, province: str) -> Optional[Any]:
        """Return an object with ``price`` and ``min_free``, or None."""
        ...


class OrderStore(Protocol):
    def find_latest_order_number_with_prefix(self, prefix: str) -> Optional[str]: ...

    def next_order_number(self, today: Optional[date] = None) -> str: ...

    def insert_order(self, order: NewOrder, items: List[NewOrderItem]) -> Any: ...


class DjangoCartStore:
    def find_cart_by_session(self, session_id: str) -> Optional[CartSnapshot]:
        cart = Cart.objects.filter(session_id=session_id).first()
        if cart is None:
            return None
        lines = [
            CartLine(product_id=product_id, quantity=quantity)
            for product_id, quantity in CartItem.objects.filter(cart=cart)
            .order_by("id")
            .values_list("product_id", "quantity")
        ]
        return CartSnapshot(id=cart.id, session_id=cart.session_id, lines=lines)

    def delete_cart_items(self, cart_id: int) -> None:
        CartItem.objects.filter(cart_id=cart_id).delete()


class DjangoProductStore:
    def get_product(self, product_id: int) -> Optional[ProductSnapshot]:
        product = Product.objects.filter(id=product_id).first()
        if product is None:
            return None
        return ProductSnapshot(
            id=product.id,
            sku=product.sku,
            name=product.name,
            price=product.price,
            transfer_price=product.transfer_price,
            stock=product.stock,
        )

    def decrement_stock(self, product_id: int, quantity: int) -> bool:
        # Conditional update; the WHERE re-checks stock under the row lock
        updated = Product.objects.filter(id=product_id, stock__gte=quantity).update(stock=F("stock") - quantity)
        return updated == 1


class DjangoZoneStore:
    def find_active_zone_by_province(self, province: str):
        return find_zone_for_province(province)


class DjangoOrderStore:
    def find_latest_order_number_with_prefix(self, prefix: str) -> Optional[str]:
        return numbering.latest_order_number_with_prefix(prefix)

    def next_order_number(self, today: Optional[date] = None) -> str:
        return numbering.next_order_number(today)

    def insert_order(self, order: NewOrder, items: List[NewOrderItem]) -> Order:
        address = order.address
        created = Order.objects.create(
            number=order.number,
            payment_method=order.payment_method,
            shipping_method=order.shipping_method,
            subtotal=order.subtotal,
            shipping=order.shipping,
            discount=order.discount,
            total=order.total,
            guest_email=order.guest_email,
            guest_name=order.guest_name,
            guest_phone=order.guest_phone,
            notes=order.notes,
            shipping_street=address.street if address else "",
            shipping_number=address.number if address else "",
            shipping_floor=(address.floor or "") if address else "",
            shipping_apartment=(address.apartment or "") if address else "",
            shipping_city=address.city if address else "",
            shipping_province=address.province if address else "",
            shipping_postal_code=address.postal_code if address else "",
        )
        OrderItem.objects.bulk_create(
            [
                OrderItem(
                    order=created,
                    product_id=item.product_id,
                    product_name=item.product_name,
                    product_sku=item.product_sku,
                    quantity=item.quantity,
                    unit_price=item.unit_price,
                    line_total=item.line_total,
                )
                for item in items
            ]
        )
        return created
