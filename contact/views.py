from common.throttling import StoreScopedRateThrottle
from drf_spectacular.utils import OpenApiExample, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from .serializers import ContactMessageSerializer


class ContactMessageCreateView(APIView):
    permission_classes = [AllowAny]
    throttle_scope = "contact"
    throttle_classes = [StoreScopedRateThrottle]

    @extend_schema(
        tags=["Contact"],
        summary="Send contact message",
        request=ContactMessageSerializer,
        responses={201: ContactMessageSerializer},
        examples=[
            OpenApiExample(
                "Message",
                value={
                    "name": "Ana Pérez",
                    "email": "ana@example.com",
                    "province": "Mendoza",
                    "subject": "Consulta de stock",
                    "message": "¿Tienen el vanitory en blanco?",
                    "captcha_answer": "7",
                },
                request_only=True,
            )
        ],
    )
    def post(self, request):
        serializer = ContactMessageSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        contact = serializer.save()
        return Response(
            {
                "data": ContactMessageSerializer(contact).data,
                "message": "Mensaje enviado correctamente. Nos comunicaremos a la brevedad.",
            },
            status=status.HTTP_201_CREATED,
        )
