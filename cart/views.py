"""DRF views for session cart operations."""

from common.sessions import INVALID_SESSION_DETAIL, SESSION_HEADER_PARAMETER, get_session_id
from common.throttling import StoreScopedRateThrottle
from drf_spectacular.utils import OpenApiExample, extend_schema, inline_serializer
from rest_framework import serializers as rf_serializers
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from .models import CartItem
from .selectors import get_or_create_cart
from .serializers import AddItemSerializer, CartReadSerializer, UpdateItemQuantitySerializer
from .services import CartError, InsufficientCartStockError, clear_cart, remove_item

CART_EXAMPLE = {
    "id": 1,
    "session_id": "08b73e...",
    "items": [
        {
            "id": 10,
            "product": {
                "id": 100,
                "sku": "FV-0181-27",
                "name": "Grifería monocomando cocina",
                "slug": "griferia-monocomando-cocina",
                "price": "10000.00",
                "transfer_price": "9100.00",
                "stock": 5,
                "free_shipping": False,
            },
            "quantity": 2,
            "unit_price": "10000.00",
            "line_total": "20000.00",
        }
    ],
    "item_count": 2,
    "subtotal": "20000.00",
    "transfer_subtotal": "18200.00",
}

CartMutationError = inline_serializer(
    name="CartMutationError",
    fields={"detail": rf_serializers.CharField(), "available": rf_serializers.IntegerField(required=False)},
)


def _missing_session() -> Response:
    return Response({"detail": INVALID_SESSION_DETAIL}, status=status.HTTP_400_BAD_REQUEST)


def _cart_error_response(exc: CartError) -> Response:
    body = {"detail": str(exc)}
    if isinstance(exc, InsufficientCartStockError):
        body["available"] = exc.available
    return Response(body, status=status.HTTP_400_BAD_REQUEST)


class CartDetailView(APIView):
    """Return the session cart, creating it on first access."""

    permission_classes = [AllowAny]
    throttle_scope = "cart"
    throttle_classes = [StoreScopedRateThrottle]

    @extend_schema(
        tags=["Cart Endpoints"],
        summary="Get cart",
        description="Returns the session cart with items, list subtotal and transfer subtotal.",
        parameters=[SESSION_HEADER_PARAMETER],
        examples=[OpenApiExample("Cart", value=CART_EXAMPLE, response_only=True)],
    )
    def get(self, request):
        session_id = get_session_id(request)
        if not session_id:
            return _missing_session()
        cart = get_or_create_cart(session_id=session_id)
        return Response(CartReadSerializer.from_cart(cart=cart).data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["Cart Endpoints"],
        summary="Clear cart",
        description="Removes every item from the session cart. The cart itself is kept.",
        parameters=[SESSION_HEADER_PARAMETER],
        responses={200: CartReadSerializer},
    )
    def delete(self, request):
        session_id = get_session_id(request)
        if not session_id:
            return _missing_session()
        cart = clear_cart(session_id=session_id)
        return Response(CartReadSerializer.from_cart(cart=cart).data, status=status.HTTP_200_OK)


class CartAddItemView(APIView):
    permission_classes = [AllowAny]
    throttle_scope = "cart_write"
    throttle_classes = [StoreScopedRateThrottle]

    @extend_schema(
        tags=["Cart Endpoints"],
        summary="Add item to cart",
        description="Adds a product to the session cart. Adding a product already in the cart increases its quantity.",
        request=AddItemSerializer,
        parameters=[SESSION_HEADER_PARAMETER],
        responses={201: CartReadSerializer, 400: CartMutationError},
        examples=[OpenApiExample("Add", value={"product_id": 100, "quantity": 2}, request_only=True)],
    )
    def post(self, request):
        session_id = get_session_id(request)
        if not session_id:
            return _missing_session()
        payload = request.data.copy()
        payload["session_id"] = session_id
        serializer = AddItemSerializer(data=payload)
        serializer.is_valid(raise_exception=True)
        try:
            item = serializer.save()
        except CartError as exc:
            return _cart_error_response(exc)
        return Response(CartReadSerializer.from_cart(cart=item.cart).data, status=status.HTTP_201_CREATED)


class CartItemView(APIView):
    """Update or delete a single cart line."""

    permission_classes = [AllowAny]
    throttle_scope = "cart_write"
    throttle_classes = [StoreScopedRateThrottle]

    @extend_schema(
        tags=["Cart Endpoints"],
        summary="Update cart item quantity",
        description="Sets the line quantity. A quantity of 0 removes the line.",
        request=UpdateItemQuantitySerializer,
        parameters=[SESSION_HEADER_PARAMETER],
        responses={200: CartReadSerializer, 400: CartMutationError},
        examples=[OpenApiExample("Update", value={"quantity": 3}, request_only=True)],
    )
    def patch(self, request, item_id: int):
        session_id = get_session_id(request)
        if not session_id:
            return _missing_session()
        cart = get_or_create_cart(session_id=session_id)
        try:
            item = CartItem.objects.get(id=item_id, cart=cart)
        except CartItem.DoesNotExist:
            return Response({"detail": "Not found."}, status=status.HTTP_404_NOT_FOUND)
        payload = request.data.copy()
        payload["session_id"] = session_id
        serializer = UpdateItemQuantitySerializer(instance=item, data=payload)
        serializer.is_valid(raise_exception=True)
        try:
            serializer.save()
        except CartError as exc:
            return _cart_error_response(exc)
        return Response(CartReadSerializer.from_cart(cart=cart).data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["Cart Endpoints"],
        summary="Remove cart item",
        parameters=[SESSION_HEADER_PARAMETER],
        responses={200: CartReadSerializer},
    )
    def delete(self, request, item_id: int):
        session_id = get_session_id(request)
        if not session_id:
            return _missing_session()
        remove_item(session_id=session_id, item_id=item_id)
        cart = get_or_create_cart(session_id=session_id)
        return Response(CartReadSerializer.from_cart(cart=cart).data, status=status.HTTP_200_OK)
