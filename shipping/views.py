"""Public shipping endpoints: active zones and postal code estimates."""

from common.throttling import StoreScopedRateThrottle
from drf_spectacular.utils import OpenApiExample, extend_schema
from rest_framework import generics, status
from rest_framework.response import Response
from rest_framework.views import APIView

from .selectors import list_active_zones
from .serializers import ShippingCalculateSerializer, ShippingZoneSerializer
from .services import estimate_shipping


class ShippingZoneListView(generics.ListAPIView):
    serializer_class = ShippingZoneSerializer
    pagination_class = None
    throttle_scope = "shipping"
    throttle_classes = [StoreScopedRateThrottle]

    def get_queryset(self):
        return list_active_zones()

    @extend_schema(tags=["Shipping Endpoints"], summary="List active shipping zones")
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)


class ShippingCalculateView(APIView):
    """Estimate delivery cost for a postal code."""

    throttle_scope = "shipping"
    throttle_classes = [StoreScopedRateThrottle]

    @extend_schema(
        tags=["Shipping Endpoints"],
        summary="Estimate shipping by postal code",
        description=(
            "Classifies the postal code into a zone and returns the delivery price. "
            "Unserved codes report delivery as unavailable; pickup is always offered."
        ),
        request=ShippingCalculateSerializer,
        examples=[
            OpenApiExample("Estimate request", value={"postal_code": "5500", "cart_total": "150000"}, request_only=True),
            OpenApiExample(
                "Estimate",
                value={
                    "available": True,
                    "message": "Envío a Gran Mendoza: $5.500",
                    "province": "Mendoza",
                    "zone": "Gran Mendoza",
                    "delivery": {
                        "available": True,
                        "price": "5500.00",
                        "free_shipping": False,
                        "free_shipping_min": "200000.00",
                        "remaining_for_free_shipping": "50000.00",
                        "estimated_days": "1-2",
                    },
                    "pickup": {
                        "available": True,
                        "price": "0",
                        "message": "Retiro gratis en sucursal",
                        "locations": ["Sucursal Mendoza - Av. Las Heras 343"],
                    },
                },
                response_only=True,
            ),
        ],
    )
    def post(self, request):
        serializer = ShippingCalculateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        estimate = estimate_shipping(
            serializer.validated_data["postal_code"],
            cart_total=serializer.validated_data.get("cart_total"),
        )
        return Response(estimate.as_dict(), status=status.HTTP_200_OK)
