"""DRF serializers for Orders.

Amounts come from the columns stored at checkout; nothing is recomputed
for display.
"""

from catalog.models import Product
from common.choices import OrderStatus, PaymentStatus
from rest_framework import serializers

from .models import Order, OrderItem


class OrderItemSerializer(serializers.ModelSerializer):
    product = serializers.SerializerMethodField()

    class Meta:
        model = OrderItem
        fields = ["id", "product", "product_name", "product_sku", "quantity", "unit_price", "line_total"]

    def get_product(self, obj: OrderItem) -> dict | None:
        if obj.product is None:
            return None
        return {"id": obj.product.id, "sku": obj.product.sku, "name": obj.product.name, "slug": obj.product.slug}


class ContactSerializer(serializers.Serializer):
    email = serializers.EmailField(source="guest_email")
    name = serializers.CharField(source="guest_name")
    phone = serializers.CharField(source="guest_phone", allow_blank=True)


class ShippingAddressSerializer(serializers.Serializer):
    street = serializers.CharField()
    number = serializers.CharField()
    floor = serializers.CharField(allow_null=True)
    apartment = serializers.CharField(allow_null=True)
    city = serializers.CharField()
    province = serializers.CharField()
    postal_code = serializers.CharField()


class OrderSerializer(serializers.ModelSerializer):
    """Public representation of an order, looked up by its number."""

    items = OrderItemSerializer(many=True, read_only=True)
    contact = ContactSerializer(source="*", read_only=True)
    shipping_address = ShippingAddressSerializer(read_only=True, allow_null=True)

    class Meta:
        model = Order
        fields = [
            "number",
            "status",
            "payment_method",
            "payment_status",
            "shipping_method",
            "items",
            "subtotal",
            "shipping",
            "discount",
            "total",
            "contact",
            "shipping_address",
            "notes",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class AdminOrderListSerializer(serializers.ModelSerializer):
    item_count = serializers.IntegerField(read_only=True)
    contact = ContactSerializer(source="*", read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "number",
            "status",
            "payment_method",
            "payment_status",
            "shipping_method",
            "subtotal",
            "shipping",
            "discount",
            "total",
            "contact",
            "customer",
            "item_count",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class AdminOrderSerializer(OrderSerializer):
    class Meta(OrderSerializer.Meta):
        fields = ["id", "customer"] + OrderSerializer.Meta.fields
        read_only_fields = fields


class AdminOrderUpdateSerializer(serializers.Serializer):
    """Partial admin update; omitted fields are left untouched."""

    status = serializers.ChoiceField(choices=OrderStatus.choices, required=False)
    payment_status = serializers.ChoiceField(choices=PaymentStatus.choices, required=False)
    notes = serializers.CharField(required=False, allow_blank=True)


class TodayStatsSerializer(serializers.Serializer):
    orders = serializers.IntegerField()
    sales = serializers.DecimalField(max_digits=14, decimal_places=2)


class OrderStatsSerializer(serializers.Serializer):
    total = serializers.IntegerField()
    by_status = serializers.DictField(child=serializers.IntegerField())
    today = TodayStatsSerializer()


class DashboardMetricsSerializer(serializers.Serializer):
    pending_orders = serializers.IntegerField()
    today_orders = serializers.IntegerField()
    today_sales = serializers.DecimalField(max_digits=14, decimal_places=2)
    low_stock_products = serializers.IntegerField()
    unread_messages = serializers.IntegerField()


class RecentOrderSerializer(serializers.ModelSerializer):
    customer_name = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = ["id", "number", "customer_name", "total", "status", "created_at"]
        read_only_fields = fields

    def get_customer_name(self, obj: Order) -> str:
        if obj.customer is not None and obj.customer.get_full_name():
            return obj.customer.get_full_name()
        return obj.guest_name or obj.guest_email or "Cliente anónimo"


class LowStockProductSerializer(serializers.ModelSerializer):
    class Meta:
        model = Product
        fields = ["id", "name", "sku", "stock"]
        read_only_fields = fields


class DashboardSerializer(serializers.Serializer):
    metrics = DashboardMetricsSerializer()
    recent_orders = RecentOrderSerializer(many=True)
    low_stock = LowStockProductSerializer(many=True)
