import logging
from decimal import Decimal

import pytest
from django.test import override_settings
from shipping.selectors import find_zone_for_province
from shipping.services import (
    delivery_cost,
    estimate_shipping,
    estimated_days,
    shipping_cost,
    zone_for_postal_code,
)
from shipping.tests.factories import ShippingZoneFactory


@pytest.mark.parametrize(
    "code,expected",
    [
        ("5500", ("Mendoza", "Gran Mendoza")),
        ("5599", ("Mendoza", "Gran Mendoza")),
        (5600, ("Mendoza", "Interior Mendoza")),
        (" 5400 ", ("San Juan", "San Juan Capital")),
        ("5499", ("San Juan", "Interior San Juan")),
    ],
)
def test_zone_for_postal_code_matches_ranges(code, expected):
    zone = zone_for_postal_code(code)
    assert zone is not None
    assert (zone.province, zone.zone) == expected


@pytest.mark.parametrize("code", ["1000", "5399", "5700", "abc", "", None])
def test_zone_for_postal_code_unserved_or_invalid(code):
    assert zone_for_postal_code(code) is None


def test_estimated_days_by_zone_label():
    assert estimated_days("Gran Mendoza") == "1-2"
    assert estimated_days("San Juan Capital") == "1-2"
    assert estimated_days("Interior Mendoza") == "3-5"


@pytest.mark.django_db
def test_shipping_cost_applies_free_threshold():
    zone = ShippingZoneFactory(price=Decimal("5500.00"), min_free=Decimal("200000.00"))
    assert shipping_cost(zone, Decimal("199999")) == Decimal("5500.00")
    assert shipping_cost(zone, Decimal("200000")) == Decimal("0")


@pytest.mark.django_db
def test_shipping_cost_without_minimum_always_charges():
    zone = ShippingZoneFactory(price=Decimal("8500.00"), min_free=None)
    assert shipping_cost(zone, Decimal("9999999")) == Decimal("8500.00")


@pytest.mark.django_db
def test_delivery_cost_matches_province_case_insensitively():
    ShippingZoneFactory(province="Mendoza", price=Decimal("5500.00"))
    zone = find_zone_for_province("mendoza")
    assert delivery_cost(zone, Decimal("1000"), province="mendoza") == Decimal("5500.00")


@pytest.mark.django_db
def test_delivery_cost_uses_zone_free_minimum():
    zone = ShippingZoneFactory(province="Mendoza", price=Decimal("5500.00"), min_free=Decimal("200000.00"))
    assert delivery_cost(zone, Decimal("200000"), province="Mendoza") == Decimal("0")


@pytest.mark.django_db
def test_delivery_cost_ignores_inactive_zones_and_falls_back(caplog):
    ShippingZoneFactory(province="San Juan", is_active=False)
    caplog.set_level(logging.INFO, logger="katsuda.shipping")
    zone = find_zone_for_province("San Juan")

    assert zone is None
    assert delivery_cost(zone, Decimal("1000"), province="San Juan") == Decimal("5000")
    assert any(getattr(r, "event", None) == "shipping.zone_fallback" for r in caplog.records)


@override_settings(SHIPPING_DEFAULT_PRICE=7200)
def test_delivery_cost_fallback_is_configurable():
    assert delivery_cost(None, Decimal("1000"), province="Córdoba") == Decimal("7200")


def test_estimate_unserved_postal_code_is_pickup_only():
    estimate = estimate_shipping("1425")
    assert estimate.available is False
    body = estimate.as_dict()
    assert "delivery" not in body
    assert body["pickup"]["available"] is True


@pytest.mark.django_db
def test_estimate_without_configured_zone_reports_unavailable():
    estimate = estimate_shipping("5600")
    assert estimate.available is False
    assert estimate.province == "Mendoza"
    assert estimate.zone == "Interior Mendoza"
    assert estimate.pickup_locations == ["Sucursal Mendoza - Av. Las Heras 343"]


@pytest.mark.django_db
def test_estimate_reports_remaining_for_free_shipping():
    ShippingZoneFactory(name="Gran Mendoza", price=Decimal("5500.00"), min_free=Decimal("200000.00"))
    estimate = estimate_shipping("5501", cart_total=Decimal("150000"))
    assert estimate.available is True
    assert estimate.price == Decimal("5500.00")
    assert estimate.free_shipping is False
    assert estimate.remaining_for_free_shipping == Decimal("50000.00")
    assert estimate.estimated_days == "1-2"
    assert estimate.message == "Envío a Gran Mendoza: $5.500"


@pytest.mark.django_db
def test_estimate_free_shipping_once_threshold_reached():
    ShippingZoneFactory(name="San Juan Capital", province="San Juan", min_free=Decimal("250000.00"))
    estimate = estimate_shipping("5400", cart_total="250000")
    assert estimate.free_shipping is True
    assert estimate.price == Decimal("0")
    assert estimate.remaining_for_free_shipping == Decimal("0")
    assert estimate.pickup_locations == ["Sucursal San Juan - Av. Rawson 123 Sur"]
