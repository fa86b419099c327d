"""Cart serializers for read and write operations."""

from rest_framework import serializers

from .models import CartItem
from .selectors import cart_summary
from .services import add_item, update_item_quantity


class CartProductSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    sku = serializers.CharField()
    name = serializers.CharField()
    slug = serializers.CharField()
    price = serializers.DecimalField(max_digits=12, decimal_places=2)
    transfer_price = serializers.DecimalField(max_digits=12, decimal_places=2, allow_null=True)
    stock = serializers.IntegerField()
    free_shipping = serializers.BooleanField()


class CartItemReadSerializer(serializers.ModelSerializer):
    """Read serializer for a cart item."""

    product = CartProductSerializer()
    unit_price = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    line_total = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = CartItem
        fields = ["id", "product", "quantity", "unit_price", "line_total"]


class CartReadSerializer(serializers.Serializer):
    """Read serializer for the cart summary and items."""

    id = serializers.IntegerField()
    session_id = serializers.CharField()
    items = CartItemReadSerializer(many=True)
    item_count = serializers.IntegerField()
    subtotal = serializers.DecimalField(max_digits=12, decimal_places=2)
    transfer_subtotal = serializers.DecimalField(max_digits=12, decimal_places=2)

    @classmethod
    def from_cart(cls, *, cart):
        return cls(cart_summary(cart=cart))


class AddItemSerializer(serializers.Serializer):
    """Write serializer for adding a product to the session cart."""

    session_id = serializers.CharField(max_length=64)
    product_id = serializers.IntegerField()
    quantity = serializers.IntegerField(min_value=1, default=1)

    def create(self, validated_data):  # type: ignore[override]
        session_id = validated_data.pop("session_id")
        return add_item(session_id=session_id, **validated_data)


class UpdateItemQuantitySerializer(serializers.Serializer):
    """Write serializer for updating a cart line; zero removes it."""

    session_id = serializers.CharField(max_length=64)
    quantity = serializers.IntegerField(min_value=0)

    def update(self, instance, validated_data):  # type: ignore[override]
        item = update_item_quantity(
            session_id=validated_data["session_id"], item_id=instance.id, quantity=validated_data["quantity"]
        )
        # A removed line still hands DRF the instance it was called with
        return item if item is not None else instance
