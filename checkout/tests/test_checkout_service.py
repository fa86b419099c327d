from decimal import Decimal

import pytest
from checkout.services import (
    CheckoutRequest,
    CheckoutValidationError,
    Contact,
    EmptyCartError,
    InsufficientStockError,
    TransactionFailure,
)
from checkout.stores import ShippingAddress
from checkout.tests.fakes import FakeOrderStore, FakeProductStore, FakeZone, InMemoryState, make_service
from django.db import OperationalError
from orders.numbering import OrderNumberError

CONTACT = Contact(email="Ana@Example.com", first_name="Ana", last_name="Pérez", phone="2614000000")
ADDRESS = ShippingAddress(
    street="Av. San Martín", number="1200", city="Mendoza", province="Mendoza", postal_code="5500"
)


def _request(session_id="sess-1", **kwargs):
    params = {"session_id": session_id, "contact": CONTACT, "payment_method": "transfer"}
    params.update(kwargs)
    return CheckoutRequest(**params)


def test_transfer_pickup_order_uses_transfer_price_and_decrements_stock():
    state = InMemoryState()
    state.add_product(1, price="10000", transfer_price="9100", stock=5)
    state.add_cart("sess-1", [(1, 1)])

    placed = make_service(state).place_order(_request(shipping_method="pickup"))

    order = state.orders[0].data
    assert placed.number == "KAT-250314-0001"
    assert order.subtotal == Decimal("9100")
    assert order.shipping == Decimal("0")
    assert order.discount == Decimal("0")
    assert order.total == Decimal("9100")
    assert order.guest_email == "ana@example.com"
    assert order.guest_name == "Ana Pérez"
    assert state.products[1].stock == 4
    assert state.carts["sess-1"].lines == []
    assert placed.shipping_address is None


def test_cash_payment_uses_list_price():
    state = InMemoryState()
    state.add_product(1, price="10000", transfer_price="9100")
    state.add_product(2, price="2500.50", transfer_price=None)
    state.add_cart("sess-1", [(1, 2), (2, 3)])

    placed = make_service(state).place_order(_request(payment_method="cash"))

    assert state.orders[0].data.subtotal == Decimal("27501.50")
    assert [item.unit_price for item in placed.items] == [Decimal("10000"), Decimal("2500.50")]
    assert [item.line_total for item in placed.items] == [Decimal("20000"), Decimal("7501.50")]


def test_transfer_falls_back_to_list_price_without_transfer_price():
    state = InMemoryState()
    state.add_product(1, price="3000", transfer_price=None)
    state.add_cart("sess-1", [(1, 1)])

    make_service(state).place_order(_request(payment_method="transfer"))

    assert state.orders[0].data.subtotal == Decimal("3000")


def test_many_lines_sum_without_float_drift():
    state = InMemoryState()
    for pid in range(1, 11):
        state.add_product(pid, price="0.10", transfer_price=None, stock=100)
    state.add_cart("sess-1", [(pid, 3) for pid in range(1, 11)])

    make_service(state).place_order(_request(payment_method="cash"))

    assert state.orders[0].data.subtotal == Decimal("3.00")


def test_validation_reports_every_missing_field_before_touching_stores():
    state = InMemoryState()
    request = CheckoutRequest(
        session_id="sess-1",
        contact=Contact(email="not-an-email", first_name="", last_name=" "),
        payment_method="",
        shipping_method="delivery",
        address=ShippingAddress(street="", number="12", city="", province="Mendoza", postal_code=""),
    )

    with pytest.raises(CheckoutValidationError) as exc:
        make_service(state).place_order(request)

    assert set(exc.value.fields) == {
        "email",
        "first_name",
        "last_name",
        "payment_method",
        "street",
        "city",
        "postal_code",
    }
    assert exc.value.kind == "validation_error"


def test_delivery_without_address_is_invalid():
    state = InMemoryState()
    with pytest.raises(CheckoutValidationError) as exc:
        make_service(state).place_order(_request(shipping_method="delivery"))
    assert {"street", "number", "city", "province", "postal_code"} <= set(exc.value.fields)


def test_unknown_payment_method_is_invalid():
    with pytest.raises(CheckoutValidationError) as exc:
        make_service(InMemoryState()).place_order(_request(payment_method="crypto"))
    assert "payment_method" in exc.value.fields


def test_full_name_longer_than_the_order_column_is_invalid():
    state = InMemoryState()
    state.add_product(1, price="10000", stock=5)
    state.add_cart("sess-1", [(1, 1)])
    contact = Contact(email="ana@example.com", first_name="A" * 100, last_name="P" * 100)

    with pytest.raises(CheckoutValidationError) as exc:
        make_service(state).place_order(_request(contact=contact))

    assert set(exc.value.fields) == {"last_name"}
    assert state.orders == []


def test_full_name_at_the_column_limit_is_accepted():
    state = InMemoryState()
    state.add_product(1, price="10000", stock=5)
    state.add_cart("sess-1", [(1, 1)])
    contact = Contact(email="ana@example.com", first_name="A" * 100, last_name="P" * 99)

    make_service(state).place_order(_request(contact=contact))

    assert len(state.orders[0].data.guest_name) == 200


def test_missing_cart_and_empty_cart_raise_empty_cart():
    state = InMemoryState()
    state.add_cart("empty", [])
    service = make_service(state)

    with pytest.raises(EmptyCartError):
        service.place_order(_request(session_id="unknown"))
    with pytest.raises(EmptyCartError):
        service.place_order(_request(session_id="empty"))
    assert state.orders == []


def test_insufficient_stock_lists_every_short_item_and_changes_nothing():
    state = InMemoryState()
    state.add_product(1, stock=1, name="Grifería")
    state.add_product(2, stock=10)
    state.add_product(3, stock=0, name="Inodoro")
    state.add_cart("sess-1", [(1, 2), (2, 1), (3, 1)])

    with pytest.raises(InsufficientStockError) as exc:
        make_service(state).place_order(_request())

    assert exc.value.items == [
        {"product_id": 1, "name": "Grifería", "requested": 2, "available": 1},
        {"product_id": 3, "name": "Inodoro", "requested": 1, "available": 0},
    ]
    assert [p.stock for p in state.products.values()] == [1, 10, 0]
    assert len(state.carts["sess-1"].lines) == 3
    assert state.orders == []


def test_missing_product_counts_as_unavailable():
    state = InMemoryState()
    state.add_cart("sess-1", [(99, 1)])

    with pytest.raises(InsufficientStockError) as exc:
        make_service(state).place_order(_request())

    assert exc.value.items == [{"product_id": 99, "name": None, "requested": 1, "available": 0}]


def test_delivery_charges_zone_price_below_free_minimum():
    state = InMemoryState()
    state.zones["Mendoza"] = FakeZone(price=Decimal("5500"), min_free=Decimal("200000"))
    state.add_product(1, price="10000")
    state.add_cart("sess-1", [(1, 1)])

    placed = make_service(state).place_order(
        _request(payment_method="cash", shipping_method="delivery", address=ADDRESS)
    )

    order = state.orders[0].data
    assert order.shipping == Decimal("5500")
    assert order.total == Decimal("15500")
    assert order.address == ADDRESS
    assert placed.shipping_address == ADDRESS


def test_delivery_is_free_at_the_zone_minimum():
    state = InMemoryState()
    state.zones["Mendoza"] = FakeZone(price=Decimal("5500"), min_free=Decimal("20000"))
    state.add_product(1, price="10000")
    state.add_cart("sess-1", [(1, 2)])

    make_service(state).place_order(_request(payment_method="cash", shipping_method="delivery", address=ADDRESS))

    assert state.orders[0].data.shipping == Decimal("0")
    assert state.orders[0].data.total == Decimal("20000")


def test_delivery_to_unknown_province_uses_default_price(settings):
    settings.SHIPPING_DEFAULT_PRICE = 5000
    state = InMemoryState()
    state.add_product(1, price="10000")
    state.add_cart("sess-1", [(1, 1)])
    address = ShippingAddress(street="Calle", number="1", city="Salta", province="Salta", postal_code="4400")

    make_service(state).place_order(_request(payment_method="cash", shipping_method="delivery", address=address))

    assert state.orders[0].data.shipping == Decimal("5000")
    assert state.orders[0].data.total == Decimal("15000")


def test_pickup_ignores_submitted_address():
    state = InMemoryState()
    state.add_product(1)
    state.add_cart("sess-1", [(1, 1)])

    placed = make_service(state).place_order(_request(shipping_method="pickup", address=ADDRESS))

    assert state.orders[0].data.address is None
    assert placed.shipping_address is None


def test_sequential_checkouts_for_last_unit_one_wins():
    state = InMemoryState()
    state.add_product(1, stock=1)
    state.add_cart("a", [(1, 1)])
    state.add_cart("b", [(1, 1)])
    service = make_service(state)

    service.place_order(_request(session_id="a"))
    with pytest.raises(InsufficientStockError):
        service.place_order(_request(session_id="b"))

    assert state.products[1].stock == 0
    assert len(state.orders) == 1


def test_same_day_checkouts_get_distinct_numbers():
    state = InMemoryState()
    state.add_product(1, stock=10)
    state.add_cart("a", [(1, 1)])
    state.add_cart("b", [(1, 1)])
    service = make_service(state)

    first = service.place_order(_request(session_id="a"))
    second = service.place_order(_request(session_id="b"))

    assert first.number == "KAT-250314-0001"
    assert second.number == "KAT-250314-0002"


class _StockThief(FakeProductStore):
    """Reports enough stock at check time, then loses the race on the second product."""

    def decrement_stock(self, product_id, quantity):
        if product_id == 2:
            return False
        return super().decrement_stock(product_id, quantity)


def test_failed_decrement_rolls_back_order_stock_and_cart():
    state = InMemoryState()
    state.add_product(1, stock=5)
    state.add_product(2, stock=5, name="Vanitory")
    state.add_cart("sess-1", [(1, 1), (2, 1)])

    with pytest.raises(InsufficientStockError) as exc:
        make_service(state, products=_StockThief(state)).place_order(_request())

    assert exc.value.items[0]["product_id"] == 2
    assert state.orders == []
    assert state.products[1].stock == 5
    assert len(state.carts["sess-1"].lines) == 2
    assert state.sequences == {}


class _BrokenOrderStore(FakeOrderStore):
    def insert_order(self, order, items):
        raise OperationalError("database is locked")


class _ExhaustedNumbering(FakeOrderStore):
    def next_order_number(self, today=None):
        raise OrderNumberError("no sequence")


@pytest.mark.parametrize("store_class", [_BrokenOrderStore, _ExhaustedNumbering])
def test_storage_failures_surface_as_transaction_failure(store_class):
    state = InMemoryState()
    state.add_product(1, stock=5)
    state.add_cart("sess-1", [(1, 1)])

    with pytest.raises(TransactionFailure) as exc:
        make_service(state, orders=store_class(state)).place_order(_request())

    assert exc.value.kind == "transaction_failure"
    assert state.products[1].stock == 5
    assert len(state.carts["sess-1"].lines) == 1
