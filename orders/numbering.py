"""Order number generation.

Numbers look like ``KAT-250314-0007``: store prefix, UTC date as YYMMDD and
a four digit sequence that restarts every day.

Sequences come from an ``OrderSequence`` row per prefix and day, incremented
with a single ``UPDATE ... SET last_value = last_value + 1``. The row lock
taken by that update serializes concurrent checkouts until the enclosing
transaction ends, so two orders can never receive the same number. The first
order of a day for a prefix creates the row, seeded from the highest number
already stored with that prefix for that day.
"""

import logging
from datetime import date
from datetime import timezone as dt_timezone
from typing import Optional

from django.conf import settings
from django.db import IntegrityError, transaction
from django.db.models import F
from django.utils import timezone

from .models import Order, OrderSequence

logger = logging.getLogger("katsuda.orders")

DEFAULT_PREFIX = "KAT"
SEQUENCE_WIDTH = 4
MAX_ATTEMPTS = 5


class OrderNumberError(Exception):
    """Raised when a sequence could not be reserved."""


def order_prefix() -> str:
    return getattr(settings, "STORE_ORDER_PREFIX", DEFAULT_PREFIX)


def utc_today() -> date:
    return timezone.now().astimezone(dt_timezone.utc).date()


def day_prefix(prefix: str, day: date) -> str:
    return f"{prefix}-{day:%y%m%d}-"


def format_order_number(prefix: str, day: date, sequence: int) -> str:
    return f"{day_prefix(prefix, day)}{sequence:0{SEQUENCE_WIDTH}d}"


def parse_sequence(number: Optional[str]) -> Optional[int]:
    """Return the trailing sequence of an order number, or None if it has none."""

    if not number:
        return None
    tail = number.rsplit("-", 1)[-1]
    if not tail.isdigit():
        return None
    return int(tail)


def latest_order_number_with_prefix(prefix: str) -> Optional[str]:
    """Lexicographically greatest order number starting with ``prefix``."""

    return (
        Order.objects.filter(number__startswith=prefix).order_by("-number").values_list("number", flat=True).first()
    )


def reserve_sequence(day: date, *, prefix: str) -> int:
    for _ in range(MAX_ATTEMPTS):
        updated = OrderSequence.objects.filter(prefix=prefix, day=day).update(last_value=F("last_value") + 1)
        if updated:
            return OrderSequence.objects.values_list("last_value", flat=True).get(prefix=prefix, day=day)

        seed = parse_sequence(latest_order_number_with_prefix(day_prefix(prefix, day))) or 0
        try:
            with transaction.atomic():
                OrderSequence.objects.create(prefix=prefix, day=day, last_value=seed + 1)
        except IntegrityError:
            # Another checkout created today's row first; increment theirs
            logger.info(
                "order_sequence_conflict",
                extra={"event": "order_sequence_conflict", "prefix": prefix, "day": day.isoformat()},
            )
            continue
        return seed + 1
    raise OrderNumberError(f"Could not reserve an order number for {day.isoformat()}")


def next_order_number(today: Optional[date] = None, *, prefix: Optional[str] = None) -> str:
    """Reserve and return the next order number for ``today`` (UTC by default).

    Call inside the transaction that inserts the order; a rolled back
    checkout gives its sequence back along with everything else.
    """

    day = today or utc_today()
    prefix = prefix or order_prefix()
    return format_order_number(prefix, day, reserve_sequence(day, prefix=prefix))
