from datetime import timedelta
from io import StringIO

import pytest
from django.core.management import call_command
from django.utils import timezone
from orders.models import IdempotencyKey


def _key(key, expires_at):
    return IdempotencyKey.objects.create(
        key=key, scope="session:s-1", path="/api/v1/checkout/", method="POST", expires_at=expires_at
    )


@pytest.mark.django_db
def test_cleanup_idempotency_deletes_expired_keys():
    _key("old", timezone.now() - timedelta(hours=1))
    _key("live", timezone.now() + timedelta(hours=1))

    out = StringIO()
    call_command("cleanup_idempotency", "--dry-run", stdout=out)
    assert "1 expired" in out.getvalue()
    assert IdempotencyKey.objects.count() == 2

    call_command("cleanup_idempotency", stdout=StringIO())
    assert list(IdempotencyKey.objects.values_list("key", flat=True)) == ["live"]
