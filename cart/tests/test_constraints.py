import pytest
from cart.models import Cart, CartItem
from cart.tests.factories import CartFactory
from catalog.tests.factories import ProductFactory
from django.db import IntegrityError


@pytest.mark.django_db
def test_unique_product_per_cart_constraint():
    cart = CartFactory()
    product = ProductFactory()
    CartItem.objects.create(cart=cart, product=product, quantity=1)

    with pytest.raises(IntegrityError):
        CartItem.objects.create(cart=cart, product=product, quantity=2)


@pytest.mark.django_db
def test_quantity_positive_constraint():
    cart = CartFactory()
    product = ProductFactory()

    with pytest.raises(IntegrityError):
        CartItem.objects.create(cart=cart, product=product, quantity=0)


@pytest.mark.django_db
def test_one_cart_per_session():
    Cart.objects.create(session_id="sess-1")
    with pytest.raises(IntegrityError):
        Cart.objects.create(session_id="sess-1")
