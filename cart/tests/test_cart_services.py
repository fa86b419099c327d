from decimal import Decimal

import pytest
from cart.models import Cart, CartItem
from cart.selectors import cart_summary, get_or_create_cart
from cart.services import (
    CartError,
    InsufficientCartStockError,
    add_item,
    clear_cart,
    remove_item,
    update_item_quantity,
)
from catalog.tests.factories import ProductFactory
from django.http import Http404


@pytest.mark.django_db
def test_get_or_create_cart_reuses_session_cart():
    first = get_or_create_cart(session_id="sess-a")
    second = get_or_create_cart(session_id="sess-a")
    assert first.id == second.id
    assert Cart.objects.filter(session_id="sess-a").count() == 1


@pytest.mark.django_db
def test_add_item_merges_quantity_into_existing_line():
    product = ProductFactory(stock=10)
    add_item(session_id="sess-a", product_id=product.id, quantity=2)
    item = add_item(session_id="sess-a", product_id=product.id, quantity=3)

    assert item.quantity == 5
    assert CartItem.objects.filter(cart__session_id="sess-a").count() == 1


@pytest.mark.django_db
def test_add_item_checks_stock_against_merged_quantity():
    product = ProductFactory(stock=4)
    add_item(session_id="sess-a", product_id=product.id, quantity=3)

    with pytest.raises(InsufficientCartStockError) as exc:
        add_item(session_id="sess-a", product_id=product.id, quantity=2)

    assert exc.value.available == 4
    assert CartItem.objects.get(cart__session_id="sess-a").quantity == 3


@pytest.mark.django_db
def test_add_item_rejects_inactive_product():
    product = ProductFactory(is_active=False)
    with pytest.raises(Http404):
        add_item(session_id="sess-a", product_id=product.id, quantity=1)


@pytest.mark.django_db
def test_add_item_rejects_non_positive_quantity():
    product = ProductFactory()
    with pytest.raises(CartError):
        add_item(session_id="sess-a", product_id=product.id, quantity=0)


@pytest.mark.django_db
def test_update_item_quantity_zero_deletes_line():
    product = ProductFactory()
    item = add_item(session_id="sess-a", product_id=product.id, quantity=2)

    assert update_item_quantity(session_id="sess-a", item_id=item.id, quantity=0) is None
    assert not CartItem.objects.filter(id=item.id).exists()


@pytest.mark.django_db
def test_update_item_quantity_checks_stock():
    product = ProductFactory(stock=3)
    item = add_item(session_id="sess-a", product_id=product.id, quantity=1)

    with pytest.raises(InsufficientCartStockError):
        update_item_quantity(session_id="sess-a", item_id=item.id, quantity=4)
    updated = update_item_quantity(session_id="sess-a", item_id=item.id, quantity=3)
    assert updated.quantity == 3


@pytest.mark.django_db
def test_update_item_in_another_session_is_not_found():
    product = ProductFactory()
    item = add_item(session_id="sess-a", product_id=product.id, quantity=1)
    with pytest.raises(Http404):
        update_item_quantity(session_id="sess-b", item_id=item.id, quantity=2)


@pytest.mark.django_db
def test_remove_and_clear_keep_cart():
    p1 = ProductFactory()
    p2 = ProductFactory()
    item = add_item(session_id="sess-a", product_id=p1.id, quantity=1)
    add_item(session_id="sess-a", product_id=p2.id, quantity=1)

    remove_item(session_id="sess-a", item_id=item.id)
    assert CartItem.objects.filter(cart__session_id="sess-a").count() == 1

    cart = clear_cart(session_id="sess-a")
    assert cart.items.count() == 0
    assert Cart.objects.filter(session_id="sess-a").exists()


@pytest.mark.django_db
def test_cart_summary_uses_transfer_price_per_product():
    with_transfer = ProductFactory(price=Decimal("10000.00"), transfer_price=Decimal("9100.00"))
    list_only = ProductFactory(price=Decimal("5000.00"), transfer_price=None)
    add_item(session_id="sess-a", product_id=with_transfer.id, quantity=2)
    add_item(session_id="sess-a", product_id=list_only.id, quantity=1)

    summary = cart_summary(cart=get_or_create_cart(session_id="sess-a"))

    assert summary["item_count"] == 3
    assert summary["subtotal"] == Decimal("25000")
    assert summary["transfer_subtotal"] == Decimal("23200")
