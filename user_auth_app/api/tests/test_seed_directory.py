from io import StringIO

from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.test import TestCase, override_settings

from categories.models import Category
from profiles.models import Profile

User = get_user_model()


@override_settings(SEED_ADMIN_EMAIL="Boss@CityLocal.test", SEED_ADMIN_PASSWORD="seedPass123")
class SeedDirectoryTests(TestCase):
    def run_seed(self, *args):
        out = StringIO()
        call_command("seed_directory", *args, stdout=out)
        return out.getvalue()

    def test_creates_admin_and_categories(self):
        output = self.run_seed()
        self.assertIn("Directory seed complete.", output)

        admin = User.objects.get(username="boss@citylocal.test")
        self.assertTrue(admin.is_staff)
        self.assertTrue(admin.check_password("seedPass123"))
        self.assertEqual(admin.profile.role, Profile.Role.ADMIN)

        self.assertEqual(Category.objects.count(), 8)
        edu = Category.objects.get(name="Education")
        self.assertEqual(edu.icon, "graduation-cap")
        self.assertEqual(edu.slug, "education")

    def test_idempotent(self):
        self.run_seed()
        admin = User.objects.get(username="boss@citylocal.test")
        admin.set_password("changedByHand1")
        admin.save()

        output = self.run_seed()
        self.assertIn("already exists", output)
        self.assertEqual(User.objects.count(), 1)
        self.assertEqual(Category.objects.count(), 8)
        admin.refresh_from_db()
        # Passwort bleibt ohne --reset-password unverändert
        self.assertTrue(admin.check_password("changedByHand1"))

    def test_reset_password(self):
        self.run_seed()
        admin = User.objects.get(username="boss@citylocal.test")
        admin.set_password("changedByHand1")
        admin.save()

        self.run_seed("--reset-password")
        admin.refresh_from_db()
        self.assertTrue(admin.check_password("seedPass123"))
