from django.contrib import admin, messages

from .models import IdempotencyKey, Order, OrderItem, OrderSequence
from .services import InvalidTransitionError, transition_order_status


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    fields = ("product", "product_sku", "product_name", "quantity", "unit_price", "line_total")
    readonly_fields = fields
    can_delete = False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ("id", "number", "status", "payment_status", "payment_method", "guest_email", "total", "created_at")
    list_filter = ("status", "payment_status", "payment_method", "shipping_method", "created_at")
    search_fields = ("number", "guest_email", "guest_name")
    date_hierarchy = "created_at"
    readonly_fields = ("number", "subtotal", "shipping", "discount", "total", "created_at", "updated_at")
    inlines = [OrderItemInline]

    def _transition(self, request, queryset, target):
        moved = 0
        for order in queryset:
            try:
                transition_order_status(order, target)
                moved += 1
            except InvalidTransitionError as exc:
                messages.warning(request, f"{order.number}: {exc}")
        if moved:
            messages.success(request, f"Updated {moved} order(s) to {target}.")

    @admin.action(description="Confirm selected orders")
    def action_confirm(self, request, queryset):
        self._transition(request, queryset, Order.STATUS_CONFIRMED)

    @admin.action(description="Cancel selected orders")
    def action_cancel(self, request, queryset):
        self._transition(request, queryset, Order.STATUS_CANCELLED)

    actions = ["action_confirm", "action_cancel"]


@admin.register(OrderSequence)
class OrderSequenceAdmin(admin.ModelAdmin):
    list_display = ("prefix", "day", "last_value")
    ordering = ("-day", "prefix")


@admin.register(IdempotencyKey)
class IdempotencyKeyAdmin(admin.ModelAdmin):
    list_display = ("id", "key", "scope", "path", "method", "response_code", "created_at")
    list_filter = ("method", "response_code", "created_at")
    search_fields = ("key", "scope", "path")
    date_hierarchy = "created_at"
