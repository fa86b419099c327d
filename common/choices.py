"""Shared enumerations and choices used across apps."""

from django.db import models


class OrderStatus(models.TextChoices):
    """Lifecycle statuses for orders."""

    PENDING = "PENDING", "Pendiente"
    CONFIRMED = "CONFIRMED", "Confirmado"
    PROCESSING = "PROCESSING", "En preparación"
    SHIPPED = "SHIPPED", "Enviado"
    DELIVERED = "DELIVERED", "Entregado"
    CANCELLED = "CANCELLED", "Cancelado"


class PaymentStatus(models.TextChoices):
    PENDING = "PENDING", "Pendiente"
    PAID = "PAID", "Pagado"
    FAILED = "FAILED", "Fallido"
    REFUNDED = "REFUNDED", "Reintegrado"


class PaymentMethod(models.TextChoices):
    """Payment methods offered at checkout."""

    TRANSFER = "transfer", "Transferencia bancaria"
    CASH = "cash", "Efectivo"


class ShippingMethod(models.TextChoices):
    PICKUP = "pickup", "Retiro en sucursal"
    DELIVERY = "delivery", "Envío a domicilio"
