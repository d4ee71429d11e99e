from django.contrib import admin
from .models import Activity


@admin.register(Activity)
class ActivityAdmin(admin.ModelAdmin):
    """
    Audit-Log: nur lesen, kein Anlegen/Ändern/Löschen.
    """
    list_display = ("id", "type", "description", "user", "business", "created_at")
    list_select_related = ("user", "business")
    list_filter = ("type", "created_at")
    search_fields = ("description", "user__username", "business__name")
    date_hierarchy = "created_at"
    ordering = ("-created_at", "-id")

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
