from decimal import Decimal

import factory
from catalog.models import Brand, Category, Product
from factory import Faker
from factory.django import DjangoModelFactory


class CategoryFactory(DjangoModelFactory):
    class Meta:
        model = Category

    name = factory.Sequence(lambda n: f"Categoría {n}")
    slug = factory.Sequence(lambda n: f"categoria-{n}")
    description = Faker("sentence")
    is_active = True
    sort_order = 0


class BrandFactory(DjangoModelFactory):
    class Meta:
        model = Brand

    name = factory.Sequence(lambda n: f"Marca {n}")
    slug = factory.Sequence(lambda n: f"marca-{n}")
    is_active = True


class ProductFactory(DjangoModelFactory):
    class Meta:
        model = Product

    sku = factory.Sequence(lambda n: f"SKU-{n:05d}")
    name = Faker("sentence", nb_words=3)
    slug = factory.Sequence(lambda n: f"producto-{n}")
    description = Faker("paragraph")
    category = factory.SubFactory(CategoryFactory)
    brand = factory.SubFactory(BrandFactory)
    price = Decimal("10000.00")
    transfer_price = Decimal("9100.00")
    stock = 10
    is_active = True
