from django.core.management.base import BaseCommand
from django.utils import timezone
from orders.models import IdempotencyKey


class Command(BaseCommand):
    help = "Delete stored checkout responses whose idempotency window has passed"

    def add_arguments(self, parser):
        parser.add_argument("--dry-run", action="store_true", help="Only report how many keys would be deleted")

    def handle(self, *args, **options):
        qs = IdempotencyKey.objects.filter(expires_at__lt=timezone.now())
        if options["dry_run"]:
            self.stdout.write(f"{qs.count()} expired idempotency keys would be deleted.")
            return
        count, _ = qs.delete()
        self.stdout.write(self.style.SUCCESS(f"Deleted {count} expired idempotency keys."))
