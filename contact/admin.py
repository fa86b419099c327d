from django.contrib import admin

from .models import ContactMessage
from .services import set_read


@admin.register(ContactMessage)
class ContactMessageAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "email", "subject", "province", "is_read", "created_at")
    list_filter = ("is_read", "province")
    search_fields = ("name", "email", "subject", "message")
    readonly_fields = ("created_at", "updated_at")
    actions = ["mark_read", "mark_unread"]

    @admin.action(description="Marcar como leídos")
    def mark_read(self, request, queryset):
        set_read(queryset, True)

    @admin.action(description="Marcar como no leídos")
    def mark_unread(self, request, queryset):
        set_read(queryset, False)
