"""Shipping cost resolution.

Two paths exist. Order submission resolves a zone by province name and falls
back to a default price when nothing matches. Pre-checkout estimates classify
a postal code against a static range table and then look up the zone by its
label. Neither path raises for "no zone"; that is an expected outcome.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, NamedTuple, Optional

from common.pricing import ZERO, qualifies_for_free_shipping, remaining_for_free_shipping, to_decimal
from django.conf import settings

from .models import ShippingZone
from .selectors import find_zone_by_name

logger = logging.getLogger("katsuda.shipping")

DEFAULT_SHIPPING_PRICE = Decimal("5000")

PICKUP_MESSAGE = "Retiro gratis en sucursal"

PICKUP_LOCATIONS = {
    "Mendoza": ["Sucursal Mendoza - Av. Las Heras 343"],
    "San Juan": ["Sucursal San Juan - Av. Rawson 123 Sur"],
}


class PostalCodeRange(NamedTuple):
    min_code: int
    max_code: int
    province: str
    zone: str


# First matching range wins
POSTAL_CODE_RANGES = (
    PostalCodeRange(5500, 5599, "Mendoza", "Gran Mendoza"),
    PostalCodeRange(5600, 5699, "Mendoza", "Interior Mendoza"),
    PostalCodeRange(5400, 5449, "San Juan", "San Juan Capital"),
    PostalCodeRange(5450, 5499, "San Juan", "Interior San Juan"),
)


class PostalZone(NamedTuple):
    province: str
    zone: str


def default_shipping_price() -> Decimal:
    """Flat price used when a delivery province matches no configured zone."""

    return to_decimal(getattr(settings, "SHIPPING_DEFAULT_PRICE", DEFAULT_SHIPPING_PRICE))


def zone_for_postal_code(postal_code) -> Optional[PostalZone]:
    """Classify a postal code; returns None for non-numeric or unserved codes."""

    try:
        code = int(str(postal_code).strip())
    except (TypeError, ValueError):
        return None
    for entry in POSTAL_CODE_RANGES:
        if entry.min_code <= code <= entry.max_code:
            return PostalZone(province=entry.province, zone=entry.zone)
    return None


def shipping_cost(zone: ShippingZone, subtotal) -> Decimal:
    """Zone price, or zero when the subtotal reaches the zone's free-shipping minimum."""

    if zone.min_free is not None and qualifies_for_free_shipping(subtotal, zone.min_free):
        return ZERO
    return zone.price


def delivery_cost(zone: Optional[ShippingZone], subtotal, *, province: str = "") -> Decimal:
    """Delivery cost for an order going to ``province``.

    ``zone`` is the active zone resolved for the province, or None when no
    zone serves it, in which case the default price applies.
    """

    if zone is None:
        fallback = default_shipping_price()
        logger.info(
            "shipping.zone_fallback",
            extra={"event": "shipping.zone_fallback", "province": province, "price": str(fallback)},
        )
        return fallback
    return to_decimal(shipping_cost(zone, subtotal))


def estimated_days(zone_label: str) -> str:
    return "1-2" if ("Capital" in zone_label or "Gran" in zone_label) else "3-5"


@dataclass
class ShippingEstimate:
    available: bool
    message: str
    province: Optional[str] = None
    zone: Optional[str] = None
    price: Optional[Decimal] = None
    free_shipping: bool = False
    free_shipping_min: Optional[Decimal] = None
    remaining_for_free_shipping: Optional[Decimal] = None
    estimated_days: Optional[str] = None
    pickup_locations: List[str] = field(default_factory=list)

    def as_dict(self) -> dict:
        data = {
            "available": self.available,
            "message": self.message,
            "pickup": {
                "available": True,
                "price": "0",
                "message": PICKUP_MESSAGE,
                "locations": self.pickup_locations,
            },
        }
        if self.province is not None:
            data["province"] = self.province
            data["zone"] = self.zone
        if self.available:
            data["delivery"] = {
                "available": True,
                "price": str(self.price),
                "free_shipping": self.free_shipping,
                "free_shipping_min": str(self.free_shipping_min) if self.free_shipping_min is not None else None,
                "remaining_for_free_shipping": (
                    str(self.remaining_for_free_shipping) if self.remaining_for_free_shipping is not None else None
                ),
                "estimated_days": self.estimated_days,
            }
        return data


def estimate_shipping(postal_code, cart_total=None) -> ShippingEstimate:
    """Estimate delivery for a postal code and optional cart total."""

    located = zone_for_postal_code(postal_code)
    if located is None:
        return ShippingEstimate(
            available=False,
            message="No realizamos envíos a esta zona. Puede retirar en nuestras sucursales.",
        )

    locations = PICKUP_LOCATIONS.get(located.province, [])
    zone = find_zone_by_name(located.zone)
    if zone is None:
        return ShippingEstimate(
            available=False,
            message="No realizamos envíos a esta zona actualmente.",
            province=located.province,
            zone=located.zone,
            pickup_locations=locations,
        )

    total = to_decimal(cart_total) if cart_total not in (None, "") else None
    price = zone.price
    free = False
    remaining = None
    if zone.min_free is not None:
        if total is not None and qualifies_for_free_shipping(total, zone.min_free):
            price = ZERO
            free = True
        remaining = remaining_for_free_shipping(total if total is not None else ZERO, zone.min_free)

    message = "¡Envío gratis!" if free else f"Envío a {located.zone}: ${price:,.0f}".replace(",", ".")
    return ShippingEstimate(
        available=True,
        message=message,
        province=located.province,
        zone=located.zone,
        price=price,
        free_shipping=free,
        free_shipping_min=zone.min_free,
        remaining_for_free_shipping=remaining,
        estimated_days=estimated_days(located.zone),
        pickup_locations=locations,
    )
