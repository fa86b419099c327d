"""Shipping serializers."""

from rest_framework import serializers

from .models import ShippingZone


class ShippingZoneSerializer(serializers.ModelSerializer):
    class Meta:
        model = ShippingZone
        fields = ["id", "name", "province", "cities", "price", "min_free"]


class ShippingCalculateSerializer(serializers.Serializer):
    """Input for the postal code estimate."""

    postal_code = serializers.CharField(max_length=16, trim_whitespace=True)
    cart_total = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False, allow_null=True)
