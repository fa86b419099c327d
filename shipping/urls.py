"""Shipping URL routes (v1)."""

from django.urls import path

from .views import ShippingCalculateView, ShippingZoneListView

app_name = "shipping"

urlpatterns = [
    path("zones/", ShippingZoneListView.as_view(), name="zone-list"),
    path("calculate/", ShippingCalculateView.as_view(), name="calculate"),
]
