"""Orders API endpoints.

Public lookup by order number plus the staff-only order management API.
"""

from common.throttling import StoreScopedRateThrottle
from django.db.models import Count
from django_filters import rest_framework as filters
from drf_spectacular.utils import OpenApiExample, OpenApiParameter, extend_schema, inline_serializer
from rest_framework import filters as drf_filters
from rest_framework import generics, status
from rest_framework import serializers as rf_serializers
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.authentication import JWTAuthentication

from .filters import OrderFilterSet
from .models import Order
from .serializers import (
    AdminOrderListSerializer,
    AdminOrderSerializer,
    AdminOrderUpdateSerializer,
    DashboardSerializer,
    OrderSerializer,
    OrderStatsSerializer,
)
from .services import InvalidTransitionError, dashboard_summary, order_stats, update_order

ORDER_EXAMPLE = {
    "number": "KAT-250314-0007",
    "status": "PENDING",
    "payment_method": "transfer",
    "payment_status": "PENDING",
    "shipping_method": "pickup",
    "items": [
        {
            "id": 1,
            "product": {"id": 100, "sku": "FV-0181-27", "name": "Grifería monocomando", "slug": "griferia"},
            "product_name": "Grifería monocomando",
            "product_sku": "FV-0181-27",
            "quantity": 1,
            "unit_price": "9100.00",
            "line_total": "9100.00",
        }
    ],
    "subtotal": "9100.00",
    "shipping": "0.00",
    "discount": "0.00",
    "total": "9100.00",
    "contact": {"email": "cliente@example.com", "name": "Ana Pérez", "phone": ""},
    "shipping_address": None,
    "notes": "",
    "created_at": "2025-03-14T12:00:00Z",
    "updated_at": "2025-03-14T12:00:00Z",
}


def _order_queryset():
    return Order.objects.select_related("customer").prefetch_related("items__product")


class OrderDetailView(APIView):
    """Look up an order by its public number."""

    throttle_scope = "orders"
    throttle_classes = [StoreScopedRateThrottle]

    @extend_schema(
        tags=["Orders"],
        summary="Get order by number",
        responses={
            200: inline_serializer(name="OrderEnvelope", fields={"data": OrderSerializer()}),
            404: inline_serializer(name="OrderNotFound", fields={"error": rf_serializers.CharField()}),
        },
        examples=[OpenApiExample("Order", value={"data": ORDER_EXAMPLE}, response_only=True)],
    )
    def get(self, request, number: str):
        order = _order_queryset().filter(number=number).first()
        if order is None:
            return Response({"error": "Pedido no encontrado"}, status=status.HTTP_404_NOT_FOUND)
        return Response({"data": OrderSerializer(order).data}, status=status.HTTP_200_OK)


class AdminPagination(PageNumberPagination):
    page_size = 10
    page_size_query_param = "page_size"
    max_page_size = 100


class AdminOrderMixin:
    authentication_classes = [JWTAuthentication]
    permission_classes = [IsAdminUser]
    throttle_classes = [StoreScopedRateThrottle]


class AdminOrderListView(AdminOrderMixin, generics.ListAPIView):
    """List orders with filters, search and ordering for the back office."""

    serializer_class = AdminOrderListSerializer
    pagination_class = AdminPagination
    throttle_scope = "orders_admin"
    filter_backends = [filters.DjangoFilterBackend, drf_filters.SearchFilter, drf_filters.OrderingFilter]
    filterset_class = OrderFilterSet
    search_fields = ["number", "guest_email", "guest_name", "customer__email", "customer__first_name"]
    ordering_fields = ["created_at", "total", "number", "status"]
    ordering = ["-created_at"]

    def get_queryset(self):
        return Order.objects.select_related("customer").annotate(item_count=Count("items"))

    @extend_schema(
        tags=["Admin Orders"],
        summary="List orders (admin)",
        parameters=[
            OpenApiParameter(name="search", description="Number, email or name contains", required=False, type=str),
            OpenApiParameter(name="status", description="Order status", required=False, type=str),
            OpenApiParameter(name="payment_status", description="Payment status", required=False, type=str),
            OpenApiParameter(name="date_from", description="Created on or after (YYYY-MM-DD)", required=False, type=str),
            OpenApiParameter(name="date_to", description="Created on or before (YYYY-MM-DD)", required=False, type=str),
            OpenApiParameter(name="ordering", description="e.g. -created_at, total", required=False, type=str),
            OpenApiParameter(name="page", description="Page number", required=False, type=int),
            OpenApiParameter(name="page_size", description="Items per page (max 100)", required=False, type=int),
        ],
    )
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)


class AdminOrderDetailView(AdminOrderMixin, APIView):
    throttle_scope = "orders_admin"

    def _get_order(self, order_id: int):
        return _order_queryset().filter(pk=order_id).first()

    @extend_schema(tags=["Admin Orders"], summary="Get order (admin)", responses={200: AdminOrderSerializer})
    def get(self, request, order_id: int):
        order = self._get_order(order_id)
        if order is None:
            return Response({"error": "Pedido no encontrado"}, status=status.HTTP_404_NOT_FOUND)
        return Response({"data": AdminOrderSerializer(order).data}, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["Admin Orders"],
        summary="Update order (admin)",
        description=(
            "Updates status, payment status and/or notes. Status changes must follow the order "
            "lifecycle; invalid transitions return 400 with the allowed targets."
        ),
        request=AdminOrderUpdateSerializer,
        examples=[
            OpenApiExample("Confirm", value={"status": "CONFIRMED"}, request_only=True),
            OpenApiExample(
                "Invalid transition",
                value={
                    "error": "No se puede cambiar de PENDING a SHIPPED",
                    "allowed_transitions": ["CONFIRMED", "CANCELLED"],
                },
                response_only=True,
                status_codes=["400"],
            ),
        ],
    )
    def patch(self, request, order_id: int):
        order = self._get_order(order_id)
        if order is None:
            return Response({"error": "Pedido no encontrado"}, status=status.HTTP_404_NOT_FOUND)
        serializer = AdminOrderUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            updated = update_order(order, **serializer.validated_data)
        except InvalidTransitionError as exc:
            return Response(
                {"error": str(exc), "allowed_transitions": exc.allowed},
                status=status.HTTP_400_BAD_REQUEST,
            )
        data = AdminOrderSerializer(_order_queryset().get(pk=updated.pk)).data
        return Response({"data": data, "message": "Pedido actualizado exitosamente"}, status=status.HTTP_200_OK)


class AdminOrderStatsView(AdminOrderMixin, APIView):
    throttle_scope = "orders_admin"

    @extend_schema(
        tags=["Admin Orders"],
        summary="Order statistics",
        responses={200: inline_serializer(name="OrderStatsEnvelope", fields={"data": OrderStatsSerializer()})},
    )
    def get(self, request):
        stats = order_stats()
        return Response({"data": OrderStatsSerializer(stats).data}, status=status.HTTP_200_OK)


class AdminDashboardView(AdminOrderMixin, APIView):
    """Back office landing page: pending work, today's sales and stock alerts."""

    throttle_scope = "orders_admin"

    @extend_schema(
        tags=["Admin Dashboard"],
        summary="Dashboard metrics",
        responses={200: inline_serializer(name="DashboardEnvelope", fields={"data": DashboardSerializer()})},
    )
    def get(self, request):
        return Response({"data": DashboardSerializer(dashboard_summary()).data}, status=status.HTTP_200_OK)
