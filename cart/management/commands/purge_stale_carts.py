from datetime import timedelta

from cart.models import Cart
from django.conf import settings
from django.core.management.base import BaseCommand
from django.utils import timezone


class Command(BaseCommand):
    help = "Delete session carts that have not been touched within the TTL"

    def add_arguments(self, parser):
        parser.add_argument("--days", type=int, default=None, help="Override CART_STALE_TTL_DAYS")

    def handle(self, *args, **options):
        ttl_days = options["days"] if options["days"] is not None else getattr(settings, "CART_STALE_TTL_DAYS", 30)
        cutoff = timezone.now() - timedelta(days=int(ttl_days))
        count, _ = Cart.objects.filter(updated_at__lt=cutoff).delete()
        self.stdout.write(self.style.SUCCESS(f"Deleted {count} stale carts and items."))
