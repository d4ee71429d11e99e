from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from rest_framework.authtoken.models import Token

from categories.models import Category
from profiles.models import Profile

DEFAULT_CATEGORIES = [
    {"name": "Restaurants & Dining", "icon": "utensils", "description": "Food and dining establishments"},
    {"name": "Professional Services", "icon": "briefcase", "description": "Professional and business services"},
    {"name": "Retail & Shopping", "icon": "shopping-bag", "description": "Retail stores and shopping"},
    {"name": "Health & Wellness", "icon": "heart", "description": "Health and wellness services"},
    {"name": "Home Services", "icon": "home", "description": "Home improvement and services"},
    {"name": "Auto Services", "icon": "car", "description": "Automotive services"},
    {"name": "Beauty & Spa", "icon": "spa", "description": "Beauty and spa services"},
    {"name": "Education", "icon": "graduation-cap", "description": "Educational services"},
]


class Command(BaseCommand):
    help = "Create the admin account and the default categories (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument(
            "--reset-password",
            action="store_true",
            help="Reset the admin password even if the account already exists.",
        )

    def handle(self, *args, **options):
        User = get_user_model()
        email = settings.SEED_ADMIN_EMAIL.strip().lower()

        admin_user, created = User.objects.get_or_create(
            username=email,
            defaults={"email": email, "first_name": "Admin User", "is_staff": True},
        )
        if created:
            self.stdout.write(self.style.SUCCESS(f"Created admin '{email}'"))
        else:
            self.stdout.write(f"Admin '{email}' already exists")

        # password only on first run unless explicitly reset
        if created or options["reset_password"]:
            admin_user.set_password(settings.SEED_ADMIN_PASSWORD)
            admin_user.save(update_fields=["password"])

        prof, _ = Profile.objects.get_or_create(user=admin_user, defaults={"role": Profile.Role.ADMIN})
        if prof.role != Profile.Role.ADMIN:
            prof.role = Profile.Role.ADMIN
            prof.save(update_fields=["role"])
        Token.objects.get_or_create(user=admin_user)

        new_categories = 0
        for order, cfg in enumerate(DEFAULT_CATEGORIES):
            _, cat_created = Category.objects.get_or_create(
                name=cfg["name"],
                defaults={"icon": cfg["icon"], "description": cfg["description"], "order": order},
            )
            new_categories += int(cat_created)
        self.stdout.write(f"  → {new_categories} new categories, {Category.objects.count()} total")

        self.stdout.write(self.style.SUCCESS("Directory seed complete."))
