from django.contrib import admin
from .models import ContactTicket


@admin.register(ContactTicket)
class ContactTicketAdmin(admin.ModelAdmin):
    """
    Support-Anfragen mit Status und Zeitstempeln.
    """
    list_display = ("id", "subject", "name", "email", "status", "is_read", "created_at")
    list_filter = ("status", "is_read")
    search_fields = ("subject", "name", "email", "message")
    ordering = ("-created_at", "-id")
    readonly_fields = ("created_at", "updated_at", "replied_at", "resolved_at")
