import threading
from datetime import date
from typing import List

import pytest
from cart.tests.factories import CartFactory, CartItemFactory
from catalog.tests.factories import ProductFactory
from checkout.services import CheckoutRequest, Contact, InsufficientStockError, default_checkout_service
from django.db import close_old_connections, connection
from orders.models import Order

DAY = date(2025, 3, 14)


def _request(session_id):
    return CheckoutRequest(
        session_id=session_id,
        contact=Contact(email=f"{session_id}@example.com", first_name="Ana", last_name="Pérez"),
        payment_method="cash",
    )


def _checkout_worker(barrier: threading.Barrier, session_id: str, numbers: List[str], errors: List[Exception]):
    # Ensure this thread uses its own DB connection
    close_old_connections()
    barrier.wait()
    try:
        numbers.append(default_checkout_service().place_order(_request(session_id), today=DAY).number)
    except Exception as exc:  # pragma: no cover
        errors.append(exc)
    finally:
        connection.close()


def _run(session_ids):
    barrier = threading.Barrier(len(session_ids))
    numbers: List[str] = []
    errors: List[Exception] = []
    threads = [
        threading.Thread(target=_checkout_worker, args=(barrier, session_id, numbers, errors))
        for session_id in session_ids
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return numbers, errors


@pytest.mark.django_db(transaction=True)
def test_threaded_checkouts_for_last_unit_only_one_succeeds():
    if connection.vendor == "sqlite":
        pytest.skip("SQLite lacks real concurrent transactions; skipping threaded test.")
    product = ProductFactory(stock=1)
    CartItemFactory(cart=CartFactory(session_id="t1"), product=product, quantity=1)
    CartItemFactory(cart=CartFactory(session_id="t2"), product=product, quantity=1)

    numbers, errors = _run(["t1", "t2"])

    assert len(numbers) == 1
    assert len(errors) == 1
    assert isinstance(errors[0], InsufficientStockError)
    product.refresh_from_db()
    assert product.stock == 0
    assert Order.objects.count() == 1


@pytest.mark.django_db(transaction=True)
def test_threaded_same_day_checkouts_get_distinct_numbers():
    if connection.vendor == "sqlite":
        pytest.skip("SQLite lacks real concurrent transactions; skipping threaded test.")
    product = ProductFactory(stock=50)
    session_ids = [f"s{i}" for i in range(4)]
    for session_id in session_ids:
        CartItemFactory(cart=CartFactory(session_id=session_id), product=product, quantity=1)

    numbers, errors = _run(session_ids)

    assert errors == []
    assert len(numbers) == 4
    assert len(set(numbers)) == 4
    assert all(number.startswith("KAT-250314-") for number in numbers)
    product.refresh_from_db()
    assert product.stock == 46
