"""Django app configuration for the Shipping app."""

from django.apps import AppConfig


class ShippingConfig(AppConfig):
    """AppConfig for shipping zones and delivery cost estimates."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "shipping"
