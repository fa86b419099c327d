"""Checkout form serializer.

Field names follow the storefront checkout form. The serializer checks shape
and required fields; ``CheckoutService`` re-validates the resulting request.
"""

from common.choices import PaymentMethod, ShippingMethod
from rest_framework import serializers

from .services import CheckoutRequest, Contact
from .stores import ShippingAddress

ADDRESS_FIELDS = ("street", "number", "city", "province", "postal_code")


class CheckoutSerializer(serializers.Serializer):
    email = serializers.EmailField(max_length=254)
    first_name = serializers.CharField(max_length=100)
    last_name = serializers.CharField(max_length=100)
    phone = serializers.CharField(max_length=40, required=False, allow_blank=True, default="")

    street = serializers.CharField(max_length=200, required=False, allow_blank=True)
    number = serializers.CharField(max_length=20, required=False, allow_blank=True)
    floor = serializers.CharField(max_length=20, required=False, allow_blank=True, allow_null=True)
    apartment = serializers.CharField(max_length=20, required=False, allow_blank=True, allow_null=True)
    city = serializers.CharField(max_length=120, required=False, allow_blank=True)
    province = serializers.CharField(max_length=120, required=False, allow_blank=True)
    postal_code = serializers.CharField(max_length=16, required=False, allow_blank=True)

    shipping_method = serializers.ChoiceField(choices=ShippingMethod.choices, default=ShippingMethod.PICKUP)
    payment_method = serializers.ChoiceField(choices=PaymentMethod.choices)
    notes = serializers.CharField(required=False, allow_blank=True, default="")

    def validate(self, attrs):
        if attrs.get("shipping_method") == ShippingMethod.DELIVERY:
            missing = {
                name: "Requerido para envío a domicilio"
                for name in ADDRESS_FIELDS
                if not (attrs.get(name) or "").strip()
            }
            if missing:
                raise serializers.ValidationError(missing)
        return attrs

    def to_request(self, *, session_id: str) -> CheckoutRequest:
        data = self.validated_data
        address = None
        if data["shipping_method"] == ShippingMethod.DELIVERY:
            address = ShippingAddress(
                street=data["street"].strip(),
                number=data["number"].strip(),
                floor=(data.get("floor") or "").strip() or None,
                apartment=(data.get("apartment") or "").strip() or None,
                city=data["city"].strip(),
                province=data["province"].strip(),
                postal_code=data["postal_code"].strip(),
            )
        return CheckoutRequest(
            session_id=session_id,
            contact=Contact(
                email=data["email"],
                first_name=data["first_name"].strip(),
                last_name=data["last_name"].strip(),
                phone=data.get("phone") or "",
            ),
            payment_method=data["payment_method"],
            shipping_method=data["shipping_method"],
            address=address,
            notes=data.get("notes") or "",
        )
