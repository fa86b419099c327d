from common.models import TimeStampedModel
from django.db import models


class StoreSettings(TimeStampedModel):
    """Public store information shown by the storefront header, footer and contact page.

    There is a single row; saving always writes ``SINGLETON_ID``. Branch
    addresses, social links and opening hours are free-form JSON edited from
    the admin.
    """

    SINGLETON_ID = 1

    store_name = models.CharField(max_length=120, default="Katsuda")
    phone = models.CharField(max_length=40, blank=True)
    whatsapp = models.CharField(max_length=40, blank=True)
    email = models.EmailField(blank=True)
    address = models.JSONField(default=dict, blank=True)
    social_media = models.JSONField(default=dict, blank=True)
    schedules = models.JSONField(default=dict, blank=True)

    class Meta:
        verbose_name = "configuración de la tienda"
        verbose_name_plural = "configuración de la tienda"

    def __str__(self) -> str:  # pragma: no cover
        return self.store_name

    def save(self, *args, **kwargs):
        self.pk = self.SINGLETON_ID
        super().save(*args, **kwargs)
