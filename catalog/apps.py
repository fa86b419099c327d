from django.apps import AppConfig


class CatalogConfig(AppConfig):
    """Products, categories and brands sold by the store."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "catalog"
    verbose_name = "Catálogo"
