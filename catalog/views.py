"""Read-only storefront views for catalog resources."""

from common.throttling import StoreScopedRateThrottle
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiExample, OpenApiParameter, extend_schema
from rest_framework import generics, status
from rest_framework.response import Response
from rest_framework.views import APIView

from . import selectors
from .serializers import BrandSerializer, CategorySerializer, ProductDetailSerializer, ProductListSerializer


def _flag(value) -> bool:
    return str(value).lower() in {"1", "true", "yes"}


class CategoryListView(generics.ListAPIView):
    serializer_class = CategorySerializer
    pagination_class = None
    throttle_scope = "catalog"
    throttle_classes = [StoreScopedRateThrottle]

    def get_queryset(self):
        return selectors.list_categories()

    @extend_schema(tags=["Catalog Endpoints"], summary="List categories")
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)


class BrandListView(generics.ListAPIView):
    serializer_class = BrandSerializer
    pagination_class = None
    throttle_scope = "catalog"
    throttle_classes = [StoreScopedRateThrottle]

    def get_queryset(self):
        return selectors.list_brands()

    @extend_schema(tags=["Catalog Endpoints"], summary="List brands")
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)


class ProductListView(generics.ListAPIView):
    """Paginated list of active products with storefront filters."""

    serializer_class = ProductListSerializer
    throttle_scope = "catalog"
    throttle_classes = [StoreScopedRateThrottle]

    def get_queryset(self):
        params = self.request.query_params
        return selectors.list_products(
            category_slug=params.get("category"),
            brand_slug=params.get("brand"),
            price_min=params.get("price_min"),
            price_max=params.get("price_max"),
            in_stock=_flag(params.get("in_stock")),
            free_shipping=_flag(params.get("free_shipping")),
            search=(params.get("search") or "").strip() or None,
            sort=params.get("sort"),
        )

    @extend_schema(
        tags=["Catalog Endpoints"],
        summary="List products",
        description="Returns active products. Filters combine with AND.",
        parameters=[
            OpenApiParameter("category", OpenApiTypes.STR, description="Category slug (includes subcategories)"),
            OpenApiParameter("brand", OpenApiTypes.STR, description="Brand slug"),
            OpenApiParameter("price_min", OpenApiTypes.NUMBER, description="Minimum list price"),
            OpenApiParameter("price_max", OpenApiTypes.NUMBER, description="Maximum list price"),
            OpenApiParameter("in_stock", OpenApiTypes.BOOL, description="Only products with stock"),
            OpenApiParameter("free_shipping", OpenApiTypes.BOOL, description="Only free-shipping products"),
            OpenApiParameter("search", OpenApiTypes.STR, description="Search by name, SKU or description"),
            OpenApiParameter(
                "sort",
                OpenApiTypes.STR,
                description="newest | price_asc | price_desc | name_asc | name_desc",
            ),
        ],
    )
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)


class FeaturedProductListView(generics.ListAPIView):
    serializer_class = ProductListSerializer
    pagination_class = None
    throttle_scope = "catalog"
    throttle_classes = [StoreScopedRateThrottle]

    def get_queryset(self):
        try:
            limit = int(self.request.query_params.get("limit", 8))
        except ValueError:
            limit = 8
        return selectors.list_featured_products(limit=max(1, min(limit, 50)))

    @extend_schema(tags=["Catalog Endpoints"], summary="List featured products")
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)


class ProductDetailView(APIView):
    throttle_scope = "catalog"
    throttle_classes = [StoreScopedRateThrottle]

    @extend_schema(
        tags=["Catalog Endpoints"],
        summary="Get product by slug",
        responses={200: ProductDetailSerializer},
        examples=[
            OpenApiExample(
                "Product",
                value={
                    "id": 1,
                    "sku": "FV-0181-27",
                    "name": "Grifería monocomando cocina",
                    "slug": "griferia-monocomando-cocina",
                    "price": "185000.00",
                    "transfer_price": "168350.00",
                    "stock": 15,
                    "installments": {"count": 12, "amount": "15417"},
                },
                response_only=True,
            )
        ],
    )
    def get(self, request, slug: str):
        product = selectors.get_product_by_slug(slug)
        if product is None:
            return Response({"detail": "Not found."}, status=status.HTTP_404_NOT_FOUND)
        return Response(ProductDetailSerializer(product).data, status=status.HTTP_200_OK)
