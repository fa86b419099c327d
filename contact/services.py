import logging

from .models import ContactMessage

logger = logging.getLogger("katsuda.contact")


def create_contact_message(
    *, name: str, email: str, message: str, phone: str = "", province: str = "", subject: str = ""
) -> ContactMessage:
    contact = ContactMessage.objects.create(
        name=name.strip(),
        email=email.strip().lower(),
        phone=(phone or "").strip(),
        province=province or "",
        subject=(subject or "").strip(),
        message=message.strip(),
    )
    logger.info("contact.message_received", extra={"event": "contact.message_received", "contact_id": contact.id})
    return contact


def set_read(queryset, is_read: bool) -> int:
    return queryset.update(is_read=is_read)
