from decimal import Decimal

import factory
from common.choices import PaymentMethod, ShippingMethod
from django.contrib.auth import get_user_model
from factory import Faker
from factory.django import DjangoModelFactory
from orders.models import Order, OrderItem


class StaffUserFactory(DjangoModelFactory):
    class Meta:
        model = get_user_model()
        django_get_or_create = ("username",)

    username = factory.Sequence(lambda n: f"staff{n}")
    email = factory.LazyAttribute(lambda o: f"{o.username}@katsuda.com.ar")
    is_staff = True
    password = factory.PostGenerationMethodCall("set_password", "Passw0rd!")


class OrderFactory(DjangoModelFactory):
    class Meta:
        model = Order

    number = factory.Sequence(lambda n: f"KAT-250314-{n + 1:04d}")
    payment_method = PaymentMethod.TRANSFER
    shipping_method = ShippingMethod.PICKUP
    subtotal = Decimal("9100.00")
    shipping = Decimal("0.00")
    discount = Decimal("0.00")
    total = Decimal("9100.00")
    guest_email = Faker("email")
    guest_name = Faker("name")


class OrderItemFactory(DjangoModelFactory):
    class Meta:
        model = OrderItem

    order = factory.SubFactory(OrderFactory)
    product = factory.SubFactory("catalog.tests.factories.ProductFactory")
    product_name = factory.LazyAttribute(lambda o: o.product.name)
    product_sku = factory.LazyAttribute(lambda o: o.product.sku)
    quantity = 1
    unit_price = Decimal("9100.00")
    line_total = factory.LazyAttribute(lambda o: o.unit_price * o.quantity)
