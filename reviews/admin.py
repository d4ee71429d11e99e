from django.contrib import admin
from django.db.models import Count
from .models import Review


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    """
    Bewertungen mit Freigabe-Status:
    - Filter nach freigegeben / gemeldet
    - Hilfreich-Stimmen als gezählte Spalte
    """
    list_display = (
        "id",
        "business",
        "user",
        "rating",
        "title",
        "is_approved",
        "is_reported",
        "helpful_count_display",
        "created_at",
    )
    list_select_related = ("business", "user")
    list_filter = ("is_approved", "is_reported", "rating")
    search_fields = ("title", "comment", "business__name", "user__email")
    ordering = ("-created_at", "-id")
    readonly_fields = ("created_at", "updated_at", "responded_at")
    filter_horizontal = ("helpful_by",)

    def get_queryset(self, request):
        return super().get_queryset(request).annotate(_helpful_count=Count("helpful_by"))

    def helpful_count_display(self, obj):
        return getattr(obj, "_helpful_count", 0)
    helpful_count_display.short_description = "helpful"
    helpful_count_display.admin_order_field = "_helpful_count"
