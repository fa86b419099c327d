"""Email utilities for the orders app.

Uses Django's email backend, with links composed from FRONTEND_URL.
"""

from django.conf import settings
from django.core.mail import send_mail


def send_order_created_email(order) -> None:
    """Send the order confirmation to the guest email address.

    Includes a link to the order page on the storefront when `FRONTEND_URL`
    is set. No-ops if the order has no email.
    """
    if not order.guest_email:
        return

    frontend = getattr(settings, "FRONTEND_URL", "")
    lines = [
        f"¡Gracias por tu compra, {order.guest_name}!",
        "",
        f"Pedido: {order.number}",
        f"Total: ${order.total:,.0f}".replace(",", "."),
        f"Forma de pago: {order.get_payment_method_display()}",
        f"Entrega: {order.get_shipping_method_display()}",
    ]
    if frontend:
        lines += ["", f"Podés ver tu pedido en: {frontend.rstrip('/')}/pedido/{order.number}"]

    send_mail(
        f"Recibimos tu pedido {order.number}",
        "\n".join(lines) + "\n",
        getattr(settings, "DEFAULT_FROM_EMAIL", None),
        [order.guest_email],
        fail_silently=True,
    )
