from django.contrib import admin

from .models import ShippingZone


@admin.register(ShippingZone)
class ShippingZoneAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "province", "price", "min_free", "is_active", "updated_at")
    list_filter = ("province", "is_active")
    search_fields = ("name", "province")
    ordering = ("province", "name")
    readonly_fields = ("created_at", "updated_at")
