import hashlib
import json
import logging
from datetime import date, datetime, time, timedelta
from datetime import timezone as dt_timezone
from decimal import Decimal
from typing import Callable, Optional, Tuple

from catalog.models import Product
from common.choices import OrderStatus, PaymentStatus
from contact.models import ContactMessage
from django.db import IntegrityError, transaction
from django.db.models import Count, Sum
from django.utils import timezone

from .models import IdempotencyKey, Order

logger = logging.getLogger("katsuda.orders")

# Active products at or below this stock show up as low stock in the dashboard
LOW_STOCK_THRESHOLD = 5
DASHBOARD_LIST_SIZE = 5


ALLOWED_TRANSITIONS = {
    OrderStatus.PENDING: (OrderStatus.CONFIRMED, OrderStatus.CANCELLED),
    OrderStatus.CONFIRMED: (OrderStatus.PROCESSING, OrderStatus.CANCELLED),
    OrderStatus.PROCESSING: (OrderStatus.SHIPPED, OrderStatus.CANCELLED),
    OrderStatus.SHIPPED: (OrderStatus.DELIVERED, OrderStatus.CANCELLED),
    OrderStatus.DELIVERED: (),
    OrderStatus.CANCELLED: (),
}


class InvalidTransitionError(Exception):
    """Raised when an order status change is not in the transition table."""

    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        self.allowed = [str(s) for s in allowed_transitions(current)]
        super().__init__(f"No se puede cambiar de {current} a {target}")


def allowed_transitions(status: str) -> tuple:
    return ALLOWED_TRANSITIONS.get(OrderStatus(status), ()) if status in OrderStatus.values else ()


def can_transition(current: str, target: str) -> bool:
    return target in allowed_transitions(current)


@transaction.atomic
def transition_order_status(order: Order, new_status: str) -> Order:
    """Move an order to ``new_status`` following the transition table."""

    locked = Order.objects.select_for_update().get(pk=order.pk)
    if not can_transition(locked.status, new_status):
        raise InvalidTransitionError(locked.status, new_status)
    prev = locked.status
    locked.status = new_status
    locked.save(update_fields=["status", "updated_at"])
    logger.info(
        "order_status_changed",
        extra={
            "event": "order_status_changed",
            "order_id": locked.id,
            "order_number": locked.number,
            "status_from": prev,
            "status_to": new_status,
        },
    )
    return locked


@transaction.atomic
def update_order(
    order: Order,
    *,
    status: Optional[str] = None,
    payment_status: Optional[str] = None,
    notes: Optional[str] = None,
) -> Order:
    """Apply an admin update. Only the given fields change.

    A status change is validated against the transition table before anything
    is written.
    """

    if status is not None:
        order = transition_order_status(order, status)
    fields = []
    if payment_status is not None:
        if payment_status not in PaymentStatus.values:
            raise ValueError(f"Unknown payment status: {payment_status}")
        order.payment_status = payment_status
        fields.append("payment_status")
    if notes is not None:
        order.notes = notes
        fields.append("notes")
    if fields:
        order.save(update_fields=fields + ["updated_at"])
        logger.info(
            "order_updated",
            extra={"event": "order_updated", "order_id": order.id, "order_number": order.number, "fields": fields},
        )
    return order


def order_stats(today: Optional[date] = None) -> dict:
    """Order counts by status plus today's order count and non-cancelled sales (UTC day)."""

    today = today or timezone.now().astimezone(dt_timezone.utc).date()
    start = datetime.combine(today, time.min, tzinfo=dt_timezone.utc)
    end = start + timedelta(days=1)

    counts = dict(Order.objects.order_by().values_list("status").annotate(n=Count("id")).values_list("status", "n"))
    by_status = {status.value.lower(): counts.get(status.value, 0) for status in OrderStatus}
    todays = Order.objects.filter(created_at__gte=start, created_at__lt=end)
    sales = todays.exclude(status=OrderStatus.CANCELLED).aggregate(total=Sum("total"))["total"]
    return {
        "total": sum(by_status.values()),
        "by_status": by_status,
        "today": {
            "orders": todays.count(),
            "sales": sales or Decimal("0.00"),
        },
    }


def dashboard_summary(today: Optional[date] = None) -> dict:
    """Back office landing data: order metrics, stock alerts and unread messages."""

    stats = order_stats(today)
    low_stock = Product.objects.filter(is_active=True, stock__lte=LOW_STOCK_THRESHOLD)
    return {
        "metrics": {
            "pending_orders": stats["by_status"][OrderStatus.PENDING.value.lower()],
            "today_orders": stats["today"]["orders"],
            "today_sales": stats["today"]["sales"],
            "low_stock_products": low_stock.count(),
            "unread_messages": ContactMessage.objects.filter(is_read=False).count(),
        },
        "recent_orders": list(
            Order.objects.select_related("customer").order_by("-created_at", "-id")[:DASHBOARD_LIST_SIZE]
        ),
        "low_stock": list(low_stock.order_by("stock", "id")[:DASHBOARD_LIST_SIZE]),
    }


def with_idempotency(
    *,
    key: str,
    scope: str,
    path: str,
    method: str,
    handler: Callable[[], Tuple[dict, int]],
    request_hash: Optional[str] = None,
) -> Tuple[dict, int]:
    """Run handler idempotently and persist its response for the given key and scope.

    - Scope is supplied by the caller, e.g. "session:<id>" for storefront checkouts.
    - If a record exists and the stored `request_hash` differs from the provided one, returns 409.
    - If a record exists but response is not yet stored, returns 409 to indicate in-progress.
    - Server errors (5xx) are not stored, so the client can retry with the same key.
    """

    method = str(method).upper()
    path = str(path)

    try:
        with transaction.atomic():
            idem = IdempotencyKey.objects.create(
                key=key,
                scope=scope,
                path=path,
                method=method,
                request_hash=request_hash,
                expires_at=timezone.now() + timedelta(hours=24),
            )
    except IntegrityError:
        idem = IdempotencyKey.objects.get(key=key, scope=scope, path=path, method=method)
        # Guard against key reuse with different fingerprints
        if idem.request_hash and request_hash and idem.request_hash != request_hash:
            return {"detail": "Idempotency key reused with different request payload"}, 409
        if idem.response_json is not None and idem.response_code is not None:
            return idem.response_json, int(idem.response_code)
        return {"detail": "Request in progress"}, 409

    try:
        body, code = handler()
    except Exception:
        IdempotencyKey.objects.filter(id=idem.id).delete()
        raise

    if code >= 500:
        IdempotencyKey.objects.filter(id=idem.id).delete()
        return body, code

    IdempotencyKey.objects.filter(id=idem.id).update(response_json=_json_safe(body), response_code=code)
    return body, code


def _json_safe(value):
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: _json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(v) for v in value]
    return value


def compute_request_hash(data: Optional[dict]) -> Optional[str]:
    """Compute a canonical SHA256 hash of the request body.

    Uses sorted keys JSON representation to stabilize the hash across equivalent payloads.
    Returns None when data is falsy.
    """
    if not data:
        return None
    payload = json.dumps(data, sort_keys=True, separators=(",", ":"), default=str)
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()
