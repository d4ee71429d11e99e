from django.contrib import admin
from django.db.models import Count
from .models import Category


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    """
    Kategorien inkl. live gezählter Businesses (kein gespeicherter Zähler).
    """
    list_display = ("id", "name", "slug", "icon", "is_active", "order", "business_count_display")
    list_editable = ("is_active", "order")
    search_fields = ("name", "slug")
    list_filter = ("is_active",)
    ordering = ("order", "name")
    prepopulated_fields = {"slug": ("name",)}

    def get_queryset(self, request):
        return super().get_queryset(request).annotate(_business_count=Count("businesses"))

    def business_count_display(self, obj):
        return getattr(obj, "_business_count", 0)
    business_count_display.short_description = "businesses"
    business_count_display.admin_order_field = "_business_count"
