from common.models import TimeStampedModel
from django.db import models


class ContactMessage(TimeStampedModel):
    """Message sent through the storefront contact form, read from the admin."""

    name = models.CharField(max_length=120)
    email = models.EmailField()
    phone = models.CharField(max_length=40, blank=True)
    province = models.CharField(max_length=120, blank=True)
    subject = models.CharField(max_length=200, blank=True)
    message = models.TextField()
    is_read = models.BooleanField(default=False, db_index=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.name} <{self.email}>"
