"""Seed initial store data for development sanity-check.

Creates the store settings, categories, brands, a handful of products and
the shipping zones served from the Mendoza and San Juan branches.
Re-running is idempotent; existing items are reused by slug/sku/name.
"""

from decimal import Decimal

from catalog.models import Brand, Category, Product
from common.pricing import transfer_price
from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils.text import slugify
from shipping.models import ShippingZone
from store.models import StoreSettings

CATEGORIES = [
    ("Griferías", "Griferías de cocina y baño de las mejores marcas"),
    ("Sanitarios", "Inodoros, bidets, lavatorios y accesorios"),
    ("Termotanques", "Termotanques y calefones a gas y eléctricos"),
]

BRANDS = ["FV", "Ferrum", "Rheem"]

PRODUCTS = [
    {
        "sku": "FV-0181-27",
        "name": "Grifería Monocomando Cocina FV Libby",
        "short_description": "Monocomando cocina con pico alto giratorio",
        "price": "185000",
        "compare_price": "210000",
        "transfer_price": "168350",
        "stock": 15,
        "category": "Griferías",
        "brand": "FV",
        "is_featured": True,
    },
    {
        "sku": "FV-0294-17",
        "name": "Grifería Bicomando Baño FV Arizona",
        "short_description": "Bicomando baño clásico",
        "price": "125000",
        "transfer_price": "113750",
        "stock": 22,
        "category": "Griferías",
        "brand": "FV",
    },
    {
        "sku": "FER-ANDINA-I",
        "name": "Inodoro Largo Ferrum Andina",
        "short_description": "Inodoro largo con depósito de apoyo",
        "price": "320000",
        "compare_price": "380000",
        "stock": 8,
        "category": "Sanitarios",
        "brand": "Ferrum",
        "is_featured": True,
        "free_shipping": True,
    },
]

ZONES = [
    {
        "name": "Gran Mendoza",
        "province": "Mendoza",
        "cities": ["Capital", "Godoy Cruz", "Guaymallén", "Las Heras", "Maipú", "Luján de Cuyo"],
        "price": "5500",
        "min_free": "200000",
    },
    {
        "name": "Interior Mendoza",
        "province": "Mendoza",
        "cities": ["San Rafael", "General Alvear", "Malargüe", "San Martín", "Rivadavia", "Tunuyán"],
        "price": "8500",
        "min_free": "350000",
    },
    {
        "name": "San Juan Capital",
        "province": "San Juan",
        "cities": ["Capital", "Rawson", "Rivadavia", "Santa Lucía", "Chimbas", "Pocito"],
        "price": "6000",
        "min_free": "250000",
    },
    {
        "name": "Interior San Juan",
        "province": "San Juan",
        "cities": ["Caucete", "San Martín", "Albardón", "Jáchal", "Valle Fértil"],
        "price": "9500",
        "min_free": "400000",
    },
]


STORE_SETTINGS = {
    "store_name": "Katsuda",
    "phone": "261 429-2473",
    "whatsapp": "5492614292473",
    "email": "info@katsuda.com.ar",
    "address": {
        "mendoza": {
            "street": "San Martín",
            "number": "1234",
            "city": "Ciudad de Mendoza",
            "province": "Mendoza",
            "postal_code": "5500",
            "phone": "261 429-2473",
        },
        "san_juan": {
            "street": "Av. Libertador",
            "number": "567",
            "city": "San Juan",
            "province": "San Juan",
            "postal_code": "5400",
            "phone": "264 422-5678",
        },
    },
    "social_media": {
        "instagram": "https://instagram.com/katsuda.srl",
        "facebook": "https://facebook.com/katsuda.srl",
    },
    "schedules": {
        "weekdays": "Lunes a Viernes: 8:30 a 13:00 y 17:00 a 20:30",
        "saturday": "Sábados: 9:00 a 13:00",
        "sunday": "Domingos: Cerrado",
    },
}

def _money(value):
    return Decimal(value) if value is not None else None


class Command(BaseCommand):
    help = "Seed initial store data (store settings, categories, brands, products, shipping zones)"

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write("Seeding store data...")

        categories = {}
        for order, (name, desc) in enumerate(CATEGORIES, start=1):
            cat, _ = Category.objects.get_or_create(
                slug=slugify(name), defaults={"name": name, "description": desc, "sort_order": order}
            )
            categories[name] = cat

        brands = {}
        for name in BRANDS:
            brand, _ = Brand.objects.get_or_create(slug=slugify(name), defaults={"name": name})
            brands[name] = brand

        created_products = 0
        for data in PRODUCTS:
            _, created = Product.objects.get_or_create(
                sku=data["sku"],
                defaults={
                    "name": data["name"],
                    "slug": slugify(data["name"]),
                    "short_description": data.get("short_description", ""),
                    "price": _money(data["price"]),
                    "compare_price": _money(data.get("compare_price")),
                    "transfer_price": _money(data.get("transfer_price")) or transfer_price(data["price"]),
                    "stock": data["stock"],
                    "category": categories[data["category"]],
                    "brand": brands[data["brand"]],
                    "is_featured": data.get("is_featured", False),
                    "free_shipping": data.get("free_shipping", False),
                },
            )
            created_products += int(created)

        for data in ZONES:
            ShippingZone.objects.get_or_create(
                name=data["name"],
                defaults={
                    "province": data["province"],
                    "cities": data["cities"],
                    "price": _money(data["price"]),
                    "min_free": _money(data["min_free"]),
                },
            )

        StoreSettings.objects.get_or_create(pk=StoreSettings.SINGLETON_ID, defaults=STORE_SETTINGS)

        self.stdout.write(
            self.style.SUCCESS(
                f"Seed complete: {len(categories)} categories, {len(brands)} brands, "
                f"{created_products} new products, {len(ZONES)} shipping zones."
            )
        )
