from common.pricing import TRANSFER_DISCOUNT
from rest_framework import serializers

from .models import StoreSettings


class StoreSettingsSerializer(serializers.ModelSerializer):
    # Percentage, taken from the pricing rules
    transfer_discount = serializers.SerializerMethodField()

    class Meta:
        model = StoreSettings
        fields = [
            "store_name",
            "phone",
            "whatsapp",
            "email",
            "address",
            "social_media",
            "transfer_discount",
            "schedules",
        ]
        read_only_fields = fields

    def get_transfer_discount(self, obj: StoreSettings) -> int:
        return int(TRANSFER_DISCOUNT * 100)
