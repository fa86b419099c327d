from datetime import timedelta

import pytest
from cart.models import Cart, CartItem
from cart.tests.factories import CartFactory, CartItemFactory
from django.core.management import call_command
from django.utils import timezone


@pytest.mark.django_db
def test_purge_stale_carts_removes_old_carts_only(settings):
    settings.CART_STALE_TTL_DAYS = 30
    stale = CartFactory(session_id="old")
    CartItemFactory(cart=stale)
    fresh = CartFactory(session_id="new")
    Cart.objects.filter(pk=stale.pk).update(updated_at=timezone.now() - timedelta(days=31))

    call_command("purge_stale_carts")

    assert list(Cart.objects.values_list("session_id", flat=True)) == [fresh.session_id]
    assert CartItem.objects.count() == 0


@pytest.mark.django_db
def test_purge_stale_carts_days_override():
    cart = CartFactory(session_id="recent")
    Cart.objects.filter(pk=cart.pk).update(updated_at=timezone.now() - timedelta(days=2))

    call_command("purge_stale_carts", days=1)

    assert not Cart.objects.exists()
