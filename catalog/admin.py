"""Admin registration for catalog models."""

from django.contrib import admin

from .models import Brand, Category, Product


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "slug", "parent", "is_active", "sort_order")
    search_fields = ("name", "slug")
    list_filter = ("is_active",)
    prepopulated_fields = {"slug": ("name",)}


@admin.register(Brand)
class BrandAdmin(admin.ModelAdmin):
    list_display = ("name", "slug", "is_active")
    search_fields = ("name", "slug")
    list_filter = ("is_active",)
    prepopulated_fields = {"slug": ("name",)}


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("sku", "name", "price", "transfer_price", "stock", "is_active", "is_featured")
    search_fields = ("sku", "name", "slug")
    list_filter = ("is_active", "is_featured", "free_shipping", "category", "brand")
    list_editable = ("stock", "is_active")
    prepopulated_fields = {"slug": ("name",)}
    raw_id_fields = ("category", "brand")
