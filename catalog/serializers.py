"""Serializers for the catalog app (read-only storefront API)."""

from common.pricing import INSTALLMENTS_COUNT, installment_amount
from rest_framework import serializers

from .models import Brand, Category, Product


class CategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ["id", "name", "slug", "description", "image_url", "parent", "sort_order"]


class BrandSerializer(serializers.ModelSerializer):
    class Meta:
        model = Brand
        fields = ["id", "name", "slug", "logo_url"]


class _RelatedRefSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    slug = serializers.CharField()


class ProductListSerializer(serializers.ModelSerializer):
    brand = _RelatedRefSerializer(allow_null=True)
    category = _RelatedRefSerializer(allow_null=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "sku",
            "name",
            "slug",
            "short_description",
            "price",
            "compare_price",
            "transfer_price",
            "stock",
            "is_featured",
            "free_shipping",
            "brand",
            "category",
        ]


class ProductDetailSerializer(ProductListSerializer):
    """Product detail including the advertised installment plan."""

    installments = serializers.SerializerMethodField()

    class Meta(ProductListSerializer.Meta):
        fields = ProductListSerializer.Meta.fields + ["description", "installments"]

    def get_installments(self, obj: Product) -> dict:
        return {
            "count": INSTALLMENTS_COUNT,
            "amount": str(installment_amount(obj.price)),
        }
