"""Pricing rules for the storefront.

Pure helpers shared by the cart, catalog and checkout code. All amounts are
``Decimal`` and results are rounded to whole currency units, half away from
zero, which is how prices are shown and charged in the store.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable

from common.choices import PaymentMethod

# Discount applied to bank transfer payments (9%)
TRANSFER_DISCOUNT = Decimal("0.09")

# Interest-free installments advertised on product pages
INSTALLMENTS_COUNT = 12

ZERO = Decimal("0")
UNIT = Decimal("1")


def to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_currency(value) -> Decimal:
    """Round to the nearest whole currency unit, half away from zero."""

    return to_decimal(value).quantize(UNIT, rounding=ROUND_HALF_UP)


def transfer_price(amount) -> Decimal:
    """Return ``amount`` with the bank transfer discount applied."""

    amount = to_decimal(amount)
    if amount < 0:
        raise ValueError("Amount must be non-negative")
    return round_currency(amount * (UNIT - TRANSFER_DISCOUNT))


def installment_amount(amount, count: int = INSTALLMENTS_COUNT) -> Decimal:
    """Return the amount of each interest-free installment."""

    if count <= 0:
        raise ValueError("Installment count must be positive")
    return round_currency(to_decimal(amount) / Decimal(count))


@dataclass(frozen=True)
class CartTotals:
    subtotal: Decimal
    transfer_subtotal: Decimal
    item_count: int


def _field(item: Any, name: str):
    if isinstance(item, dict):
        return item[name]
    return getattr(item, name)


def cart_totals(items: Iterable[Any]) -> CartTotals:
    """Compute subtotal, transfer subtotal and item count.

    ``items`` may be mappings or objects exposing ``price`` and ``quantity``.
    """

    subtotal = ZERO
    item_count = 0
    for item in items:
        quantity = int(_field(item, "quantity"))
        subtotal += to_decimal(_field(item, "price")) * quantity
        item_count += quantity
    return CartTotals(subtotal=subtotal, transfer_subtotal=transfer_price(subtotal), item_count=item_count)


def unit_price_for(product: Any, payment_method: str) -> Decimal:
    """Unit price charged for ``product`` under ``payment_method``.

    Transfer payments use the product's own transfer price when it has one;
    every other case pays the list price.
    """

    transfer = _field(product, "transfer_price")
    if payment_method == PaymentMethod.TRANSFER and transfer is not None:
        return to_decimal(transfer)
    return to_decimal(_field(product, "price"))


def qualifies_for_free_shipping(subtotal, minimum) -> bool:
    return to_decimal(subtotal) >= to_decimal(minimum)


def remaining_for_free_shipping(subtotal, minimum) -> Decimal:
    """Amount still missing to reach the free shipping minimum (never negative)."""

    remaining = to_decimal(minimum) - to_decimal(subtotal)
    return remaining if remaining > 0 else ZERO
