"""URL routes for the orders app (v1)."""

from django.urls import path

from .views import OrderDetailView

app_name = "orders"

urlpatterns = [
    path("<str:number>/", OrderDetailView.as_view(), name="order-detail"),
]
