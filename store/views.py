from common.throttling import StoreScopedRateThrottle
from drf_spectacular.utils import OpenApiExample, extend_schema, inline_serializer
from rest_framework import serializers as rf_serializers
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from .selectors import get_store_settings
from .serializers import StoreSettingsSerializer


class StoreSettingsView(APIView):
    permission_classes = [AllowAny]
    throttle_scope = "catalog"
    throttle_classes = [StoreScopedRateThrottle]

    @extend_schema(
        tags=["Store"],
        summary="Public store settings",
        responses={
            200: inline_serializer(name="StoreSettingsEnvelope", fields={"data": StoreSettingsSerializer()}),
            404: inline_serializer(name="StoreSettingsNotFound", fields={"error": rf_serializers.CharField()}),
        },
        examples=[
            OpenApiExample(
                "Settings",
                value={
                    "data": {
                        "store_name": "Katsuda",
                        "phone": "261 429-2473",
                        "whatsapp": "5492614292473",
                        "email": "info@katsuda.com.ar",
                        "address": {"mendoza": {"street": "San Martín", "number": "1234"}},
                        "social_media": {"instagram": "https://instagram.com/katsuda.srl"},
                        "transfer_discount": 9,
                        "schedules": {"saturday": "Sábados: 9:00 a 13:00"},
                    }
                },
                response_only=True,
            )
        ],
    )
    def get(self, request):
        store_settings = get_store_settings()
        if store_settings is None:
            return Response({"error": "Configuración no encontrada"}, status=status.HTTP_404_NOT_FOUND)
        return Response({"data": StoreSettingsSerializer(store_settings).data}, status=status.HTTP_200_OK)
