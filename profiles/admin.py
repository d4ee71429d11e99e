from django.contrib import admin
from .models import Profile, promote_to_business_owner


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    """
    Verzeichnis-Rollen der Accounts (user / business_owner / admin) mit Kontaktdaten.
    """
    list_display = ("id", "user_email", "user_name", "role", "phone", "created_at")
    list_select_related = ("user",)
    search_fields = ("user__email", "user__first_name", "phone")
    list_filter = ("role",)
    ordering = ("-created_at", "-id")
    readonly_fields = ("created_at",)
    actions = ("make_business_owner",)

    @admin.display(description="email", ordering="user__email")
    def user_email(self, obj):
        return obj.user.email

    @admin.display(description="name", ordering="user__first_name")
    def user_name(self, obj):
        return obj.user.first_name

    @admin.action(description="Als Business-Owner markieren")
    def make_business_owner(self, request, queryset):
        """Nur einfache User werden hochgestuft; Admins bleiben Admins."""
        for profile in queryset.select_related("user"):
            promote_to_business_owner(profile.user)
