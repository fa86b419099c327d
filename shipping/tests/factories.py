from decimal import Decimal

import factory
from factory.django import DjangoModelFactory
from shipping.models import ShippingZone


class ShippingZoneFactory(DjangoModelFactory):
    class Meta:
        model = ShippingZone

    name = factory.Sequence(lambda n: f"Zona {n}")
    province = "Mendoza"
    cities = factory.LazyFunction(lambda: ["Capital", "Godoy Cruz"])
    price = Decimal("5500.00")
    min_free = Decimal("200000.00")
    is_active = True
