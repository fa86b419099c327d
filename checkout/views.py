"""Checkout endpoint."""

from common.sessions import INVALID_SESSION_DETAIL, SESSION_HEADER_PARAMETER, get_session_id
from common.throttling import StoreScopedRateThrottle
from drf_spectacular.utils import OpenApiExample, OpenApiParameter, extend_schema, inline_serializer
from orders.models import Order
from orders.serializers import OrderSerializer
from orders.services import compute_request_hash, with_idempotency
from rest_framework import serializers as rf_serializers
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from .serializers import CheckoutSerializer
from .services import (
    CheckoutError,
    CheckoutValidationError,
    EmptyCartError,
    InsufficientStockError,
    TransactionFailure,
    default_checkout_service,
)

ERROR_STATUS = {
    CheckoutValidationError: status.HTTP_400_BAD_REQUEST,
    EmptyCartError: status.HTTP_400_BAD_REQUEST,
    InsufficientStockError: status.HTTP_409_CONFLICT,
    TransactionFailure: status.HTTP_503_SERVICE_UNAVAILABLE,
}

CheckoutErrorSerializer = inline_serializer(
    name="CheckoutError",
    fields={
        "error": rf_serializers.CharField(),
        "detail": rf_serializers.CharField(),
        "fields": rf_serializers.DictField(child=rf_serializers.CharField(), required=False),
        "stock_errors": rf_serializers.ListField(child=rf_serializers.DictField(), required=False),
    },
)


def checkout_error_body(exc: CheckoutError) -> dict:
    body = {"error": exc.kind, "detail": str(exc)}
    if isinstance(exc, CheckoutValidationError):
        body["fields"] = exc.fields
    elif isinstance(exc, InsufficientStockError):
        body["stock_errors"] = exc.items
    return body


def _first_errors(errors) -> dict:
    fields = {}
    for name, messages in errors.items():
        if isinstance(messages, (list, tuple)) and messages:
            fields[name] = str(messages[0])
        else:
            fields[name] = str(messages)
    return fields


class CheckoutView(APIView):
    """Place an order from the session cart.

    Idempotent when `Idempotency-Key` is provided: a retried request with the
    same key and payload replays the stored response instead of creating a
    second order.
    """

    permission_classes = [AllowAny]
    throttle_scope = "checkout"
    throttle_classes = [StoreScopedRateThrottle]

    @extend_schema(
        tags=["Checkout"],
        summary="Place order",
        description=(
            "Creates an order from the session cart. Stock is validated for every item, the bank "
            "transfer price applies when paying by transfer, and delivery orders are charged the "
            "shipping zone price unless the free shipping minimum is reached."
        ),
        parameters=[
            SESSION_HEADER_PARAMETER,
            OpenApiParameter(
                name="Idempotency-Key",
                location=OpenApiParameter.HEADER,
                required=False,
                description="Makes the request idempotent within the session",
                type=str,
            ),
        ],
        request=CheckoutSerializer,
        responses={
            201: inline_serializer(
                name="CheckoutCreated",
                fields={"data": OrderSerializer(), "message": rf_serializers.CharField()},
            ),
            400: CheckoutErrorSerializer,
            409: CheckoutErrorSerializer,
            503: CheckoutErrorSerializer,
        },
        examples=[
            OpenApiExample(
                "Pickup with transfer",
                value={
                    "email": "cliente@example.com",
                    "first_name": "Ana",
                    "last_name": "Pérez",
                    "phone": "2614000000",
                    "shipping_method": "pickup",
                    "payment_method": "transfer",
                },
                request_only=True,
            ),
            OpenApiExample(
                "Insufficient stock",
                value={
                    "error": "insufficient_stock",
                    "detail": "Stock insuficiente para algunos productos",
                    "stock_errors": [{"product_id": 100, "name": "Grifería", "requested": 3, "available": 1}],
                },
                response_only=True,
                status_codes=["409"],
            ),
        ],
    )
    def post(self, request):
        session_id = get_session_id(request)
        if not session_id:
            return Response({"detail": INVALID_SESSION_DETAIL}, status=status.HTTP_400_BAD_REQUEST)

        def _handler():
            serializer = CheckoutSerializer(data=request.data)
            if not serializer.is_valid():
                exc = CheckoutValidationError(_first_errors(serializer.errors))
                return checkout_error_body(exc), status.HTTP_400_BAD_REQUEST
            try:
                placed = default_checkout_service().place_order(serializer.to_request(session_id=session_id))
            except CheckoutError as exc:
                return checkout_error_body(exc), ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
            order = Order.objects.prefetch_related("items__product").get(pk=placed.order.pk)
            return {"data": OrderSerializer(order).data, "message": "Pedido creado exitosamente"}, 201

        idem_key = request.headers.get("Idempotency-Key")
        if idem_key:
            body, code = with_idempotency(
                key=idem_key,
                scope=f"session:{session_id}",
                path=str(request.path),
                method=str(request.method),
                request_hash=compute_request_hash(getattr(request, "data", None)),
                handler=_handler,
            )
            return Response(body, status=code)

        body, code = _handler()
        return Response(body, status=code)
