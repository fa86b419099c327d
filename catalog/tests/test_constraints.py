import pytest
from catalog.models import Product
from catalog.tests.factories import ProductFactory
from django.db import IntegrityError


@pytest.mark.django_db
def test_stock_cannot_go_negative():
    p = ProductFactory(stock=1)
    with pytest.raises(IntegrityError):
        Product.objects.filter(id=p.id).update(stock=-1)


@pytest.mark.django_db
def test_sku_is_unique():
    ProductFactory(sku="FV-0181-27")
    with pytest.raises(IntegrityError):
        ProductFactory(sku="FV-0181-27")

