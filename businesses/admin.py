from django.contrib import admin
from .models import Business, BusinessClaim


class BusinessClaimInline(admin.TabularInline):
    """
    Besitzanfragen direkt im Business-Formular (nur lesend).
    """
    model = BusinessClaim
    fk_name = "business"
    extra = 0
    fields = ("user", "status", "message", "decided_by", "decided_at", "created_at")
    readonly_fields = fields
    can_delete = False
    show_change_link = True


@admin.register(Business)
class BusinessAdmin(admin.ModelAdmin):
    """
    Verwaltung der Einträge:
    - Status (pending / rejected / active) als Spalte
    - Bewertung und Aufrufe nur lesend (werden berechnet)
    - Moderation läuft über die API, nicht über dieses Formular
    """
    inlines = [BusinessClaimInline]

    list_display = (
        "id",
        "name",
        "city",
        "state",
        "category",
        "owner",
        "status_display",
        "is_featured",
        "rating_average",
        "rating_count",
        "views",
        "created_at",
    )
    list_select_related = ("category", "owner")
    search_fields = ("name", "description", "city", "state", "owner__email")
    list_filter = ("is_active", "is_verified", "is_featured", "category")
    date_hierarchy = "created_at"
    ordering = ("-created_at", "-id")
    readonly_fields = (
        "slug",
        "views",
        "rating_average",
        "rating_count",
        "claimed_at",
        "rejected_at",
        "approved_at",
        "created_at",
        "updated_at",
    )

    def status_display(self, obj):
        return obj.status
    status_display.short_description = "status"


@admin.register(BusinessClaim)
class BusinessClaimAdmin(admin.ModelAdmin):
    """
    Alle Besitzanfragen mit Status und Entscheider.
    """
    list_display = ("id", "business", "user", "status", "decided_by", "decided_at", "created_at")
    list_select_related = ("business", "user", "decided_by")
    list_filter = ("status",)
    search_fields = ("business__name", "user__email")
    ordering = ("-created_at", "-id")
