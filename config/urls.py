"""Katsuda URL configuration.

Storefront endpoints live under ``/api/v1/``; staff endpoints under
``/api/v1/admin/`` authenticate with JWT bearer tokens.
"""

from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView
from orders.views import AdminDashboardView
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from .health import health

admin.site.site_header = "Katsuda Admin"
admin.site.index_title = "Administración"

urlpatterns = [
    path("admin/", admin.site.urls),
    # API schema and Swagger UI
    path("api/schema/", SpectacularAPIView.as_view(), name="api-schema"),
    path("api/docs/", SpectacularSwaggerView.as_view(url_name="api-schema"), name="api-docs"),
    # Healthcheck
    path("health/", health, name="health"),
    # Staff authentication
    path("api/v1/auth/token/", TokenObtainPairView.as_view(), name="token-obtain"),
    path("api/v1/auth/token/refresh/", TokenRefreshView.as_view(), name="token-refresh"),
    # Storefront
    path("api/v1/catalog/", include("catalog.urls")),
    path("api/v1/cart/", include("cart.urls")),
    path("api/v1/shipping/", include("shipping.urls")),
    path("api/v1/checkout/", include("checkout.urls")),
    path("api/v1/orders/", include("orders.urls")),
    path("api/v1/contact/", include("contact.urls")),
    path("api/v1/settings/", include("store.urls")),
    # Back office
    path("api/v1/admin/orders/", include("orders.admin_urls")),
    path("api/v1/admin/dashboard/", AdminDashboardView.as_view(), name="admin-dashboard"),
]
