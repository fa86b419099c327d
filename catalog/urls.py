"""URL routes for the catalog app."""

from django.urls import path

from .views import BrandListView, CategoryListView, FeaturedProductListView, ProductDetailView, ProductListView

app_name = "catalog"

urlpatterns = [
    path("categories/", CategoryListView.as_view(), name="category-list"),
    path("brands/", BrandListView.as_view(), name="brand-list"),
    path("products/", ProductListView.as_view(), name="product-list"),
    path("products/featured/", FeaturedProductListView.as_view(), name="product-featured"),
    path("products/<str:slug>/", ProductDetailView.as_view(), name="product-detail"),
]
