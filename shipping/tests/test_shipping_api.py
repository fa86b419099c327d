from decimal import Decimal

import pytest
from rest_framework.test import APIClient
from shipping.tests.factories import ShippingZoneFactory


@pytest.mark.django_db
def test_zone_list_only_returns_active_zones():
    ShippingZoneFactory(name="Gran Mendoza")
    ShippingZoneFactory(name="Interior Mendoza", is_active=False)
    client = APIClient()
    r = client.get("/api/v1/shipping/zones/")
    assert r.status_code == 200
    assert [z["name"] for z in r.json()] == ["Gran Mendoza"]


@pytest.mark.django_db
def test_calculate_returns_delivery_and_pickup():
    ShippingZoneFactory(name="Gran Mendoza", price=Decimal("5500.00"), min_free=Decimal("200000.00"))
    client = APIClient()
    r = client.post("/api/v1/shipping/calculate/", {"postal_code": "5500", "cart_total": "210000"}, format="json")
    assert r.status_code == 200
    body = r.json()
    assert body["available"] is True
    assert body["zone"] == "Gran Mendoza"
    assert body["delivery"]["free_shipping"] is True
    assert Decimal(body["delivery"]["price"]) == Decimal("0")
    assert body["pickup"]["locations"] == ["Sucursal Mendoza - Av. Las Heras 343"]


@pytest.mark.django_db
def test_calculate_unserved_code_offers_pickup_only():
    client = APIClient()
    r = client.post("/api/v1/shipping/calculate/", {"postal_code": "1000"}, format="json")
    assert r.status_code == 200
    assert r.json()["available"] is False
    assert "delivery" not in r.json()


@pytest.mark.django_db
def test_calculate_requires_postal_code():
    client = APIClient()
    r = client.post("/api/v1/shipping/calculate/", {}, format="json")
    assert r.status_code == 400
    assert "postal_code" in r.json()
