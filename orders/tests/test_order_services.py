from datetime import date, datetime
from datetime import timezone as dt_timezone
from decimal import Decimal

import pytest
from catalog.tests.factories import ProductFactory
from common.choices import OrderStatus, PaymentStatus
from contact.models import ContactMessage
from orders.models import Order
from orders.services import (
    InvalidTransitionError,
    allowed_transitions,
    can_transition,
    dashboard_summary,
    order_stats,
    transition_order_status,
    update_order,
)
from orders.tests.factories import OrderFactory


@pytest.mark.parametrize(
    "current,target,ok",
    [
        ("PENDING", "CONFIRMED", True),
        ("PENDING", "CANCELLED", True),
        ("PENDING", "SHIPPED", False),
        ("CONFIRMED", "PROCESSING", True),
        ("PROCESSING", "SHIPPED", True),
        ("SHIPPED", "DELIVERED", True),
        ("SHIPPED", "CANCELLED", True),
        ("DELIVERED", "CANCELLED", False),
        ("CANCELLED", "PENDING", False),
        ("PENDING", "BOGUS", False),
    ],
)
def test_transition_table(current, target, ok):
    assert can_transition(current, target) is ok


def test_terminal_states_allow_nothing():
    assert allowed_transitions("DELIVERED") == ()
    assert allowed_transitions("CANCELLED") == ()
    assert allowed_transitions("UNKNOWN") == ()


@pytest.mark.django_db
def test_transition_updates_status():
    order = OrderFactory()
    updated = transition_order_status(order, OrderStatus.CONFIRMED)
    assert updated.status == OrderStatus.CONFIRMED
    order.refresh_from_db()
    assert order.status == OrderStatus.CONFIRMED


@pytest.mark.django_db
def test_invalid_transition_raises_with_allowed_targets():
    order = OrderFactory()
    with pytest.raises(InvalidTransitionError) as exc:
        transition_order_status(order, OrderStatus.SHIPPED)
    assert str(exc.value) == "No se puede cambiar de PENDING a SHIPPED"
    assert exc.value.allowed == ["CONFIRMED", "CANCELLED"]
    order.refresh_from_db()
    assert order.status == OrderStatus.PENDING


@pytest.mark.django_db
def test_update_order_changes_only_given_fields():
    order = OrderFactory(notes="original")
    update_order(order, payment_status=PaymentStatus.PAID)
    order.refresh_from_db()
    assert order.payment_status == PaymentStatus.PAID
    assert order.status == OrderStatus.PENDING
    assert order.notes == "original"


@pytest.mark.django_db
def test_update_order_invalid_status_writes_nothing():
    order = OrderFactory(notes="original")
    with pytest.raises(InvalidTransitionError):
        update_order(order, status=OrderStatus.DELIVERED, notes="changed")
    order.refresh_from_db()
    assert order.notes == "original"


@pytest.mark.django_db
def test_order_stats_counts_by_status_and_today_sales():
    today = date(2025, 3, 14)
    noon = datetime(2025, 3, 14, 12, tzinfo=dt_timezone.utc)
    a = OrderFactory(total=Decimal("1000.00"))
    b = OrderFactory(total=Decimal("2500.00"), status=OrderStatus.CONFIRMED)
    c = OrderFactory(total=Decimal("9999.00"), status=OrderStatus.CANCELLED)
    old = OrderFactory(total=Decimal("500.00"))
    Order.objects.filter(pk__in=[a.pk, b.pk, c.pk]).update(created_at=noon)
    Order.objects.filter(pk=old.pk).update(created_at=datetime(2025, 3, 10, tzinfo=dt_timezone.utc))

    stats = order_stats(today)

    assert stats["total"] == 4
    assert stats["by_status"]["pending"] == 2
    assert stats["by_status"]["confirmed"] == 1
    assert stats["by_status"]["cancelled"] == 1
    assert stats["by_status"]["delivered"] == 0
    assert stats["today"]["orders"] == 3
    assert stats["today"]["sales"] == Decimal("3500.00")


@pytest.mark.django_db
def test_dashboard_summary_counts_alerts_and_lists_recent_orders():
    for _ in range(6):
        OrderFactory()
    OrderFactory(status=OrderStatus.CONFIRMED)
    ProductFactory(stock=5)
    ProductFactory(stock=0)
    ProductFactory(stock=6)
    ProductFactory(stock=1, is_active=False)
    ContactMessage.objects.create(name="Ana", email="ana@example.com", message="Hola")
    ContactMessage.objects.create(name="Luis", email="luis@example.com", message="Hola", is_read=True)

    summary = dashboard_summary()

    metrics = summary["metrics"]
    assert metrics["pending_orders"] == 6
    assert metrics["today_orders"] == 7
    assert metrics["low_stock_products"] == 2
    assert metrics["unread_messages"] == 1
    assert len(summary["recent_orders"]) == 5
    assert summary["recent_orders"][0] == Order.objects.order_by("-created_at", "-id").first()
    assert [p.stock for p in summary["low_stock"]] == [0, 5]
