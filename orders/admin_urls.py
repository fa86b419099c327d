"""Staff-only order management routes (v1)."""

from django.urls import path

from .views import AdminOrderDetailView, AdminOrderListView, AdminOrderStatsView

app_name = "orders_admin"

urlpatterns = [
    path("", AdminOrderListView.as_view(), name="order-list"),
    path("stats/summary/", AdminOrderStatsView.as_view(), name="order-stats"),
    path("<int:order_id>/", AdminOrderDetailView.as_view(), name="order-detail"),
]
