from rest_framework import serializers

from .models import ContactMessage
from .services import create_contact_message


class ContactMessageSerializer(serializers.ModelSerializer):
    # Answer to the storefront's arithmetic challenge; checked for presence only
    captcha_answer = serializers.CharField(write_only=True, allow_blank=True)

    class Meta:
        model = ContactMessage
        fields = ["id", "name", "email", "phone", "province", "subject", "message", "captcha_answer", "created_at"]
        read_only_fields = ["id", "created_at"]
        extra_kwargs = {
            "phone": {"required": False},
            "province": {"required": False},
            "subject": {"required": False},
        }

    def validate_captcha_answer(self, value):
        if not str(value).strip():
            raise serializers.ValidationError("Por favor complete la verificación de seguridad")
        return value

    def create(self, validated_data):
        validated_data.pop("captcha_answer", None)
        return create_contact_message(**validated_data)
