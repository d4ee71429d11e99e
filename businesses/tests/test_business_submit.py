from django.core import mail
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from activities.models import Activity
from businesses.models import Business
from common.tests.factories import business_payload, make_business, make_category, make_user
from profiles.models import Profile


class BusinessSubmitTests(APITestCase):
    def setUp(self):
        self.url = reverse("business-list")
        self.category = make_category()
        self.user, self.token = make_user("jane@example.com", name="Jane")
        self.admin, self.admin_token = make_user("admin@example.com", role=Profile.Role.ADMIN)

    def auth(self, token):
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {token.key}")

    def test_submit_creates_pending_listing_201(self):
        self.auth(self.token)
        with self.captureOnCommitCallbacks(execute=True):
            res = self.client.post(self.url, business_payload(self.category), format="json")
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertIn("message", res.data)
        body = res.data["business"]
        self.assertEqual(body["status"], "pending")
        self.assertFalse(body["is_active"])
        self.assertEqual(body["rating"], {"average": 0.0, "count": 0})
        self.assertEqual(body["owner"]["id"], self.user.id)

        business = Business.objects.get(pk=body["id"])
        self.assertTrue(business.slug.startswith("joes-diner-"))
        # Rolle wird hochgestuft
        self.user.profile.refresh_from_db()
        self.assertEqual(self.user.profile.role, Profile.Role.BUSINESS_OWNER)
        self.assertTrue(
            Activity.objects.filter(type=Activity.Type.BUSINESS_SUBMITTED, business=business).exists()
        )
        self.assertEqual(len(mail.outbox), 1)
        self.assertIn("Joe's Diner", mail.outbox[0].subject)

    def test_admin_keeps_admin_role(self):
        self.auth(self.admin_token)
        res = self.client.post(self.url, business_payload(self.category), format="json")
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.admin.profile.refresh_from_db()
        self.assertEqual(self.admin.profile.role, Profile.Role.ADMIN)

    def test_lifecycle_fields_in_payload_are_ignored(self):
        self.auth(self.token)
        payload = business_payload(self.category, is_active=True, is_featured=True, views=99)
        res = self.client.post(self.url, payload, format="json")
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        business = Business.objects.get(pk=res.data["business"]["id"])
        self.assertFalse(business.is_active)
        self.assertFalse(business.is_featured)
        self.assertEqual(business.views, 0)

    def test_requires_auth_401(self):
        res = self.client.post(self.url, business_payload(self.category), format="json")
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertIn("error", res.data)

    def test_missing_fields_400(self):
        self.auth(self.token)
        payload = business_payload(self.category)
        del payload["phone"]
        payload["name"] = "   "
        res = self.client.post(self.url, payload, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("phone", res.data["errors"])
        self.assertIn("name", res.data["errors"])
        self.assertFalse(Business.objects.exists())

    def test_unknown_category_400(self):
        self.auth(self.token)
        payload = business_payload(self.category)
        payload["category"] = 9999
        res = self.client.post(self.url, payload, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("Selected category does not exist.", res.data["error"])

    def test_too_many_images_400(self):
        self.auth(self.token)
        images = [f"https://img.example.com/{i}.jpg" for i in range(11)]
        res = self.client.post(self.url, business_payload(self.category, images=images), format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_hours_and_tags_are_normalised(self):
        self.auth(self.token)
        payload = business_payload(
            self.category,
            hours={"Monday": {"open": "09:00", "close": "17:00"}, "sunday": {"closed": True}},
            tags=["pizza", " Pizza ", "", "late night"],
        )
        res = self.client.post(self.url, payload, format="json")
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        body = res.data["business"]
        self.assertEqual(body["tags"], ["pizza", "late night"])
        self.assertEqual(body["hours"]["monday"], {"open": "09:00", "close": "17:00", "closed": False})
        self.assertTrue(body["hours"]["sunday"]["closed"])

    def test_unknown_weekday_400(self):
        self.auth(self.token)
        payload = business_payload(self.category, hours={"funday": {"open": "09:00"}})
        res = self.client.post(self.url, payload, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_pending_listing_hidden_from_public(self):
        self.auth(self.token)
        res = self.client.post(self.url, business_payload(self.category), format="json")
        business_id = res.data["business"]["id"]

        self.client.credentials()
        listing = self.client.get(self.url)
        self.assertEqual(listing.data["total"], 0)
        detail = self.client.get(reverse("business-detail", args=[business_id]))
        self.assertEqual(detail.status_code, status.HTTP_404_NOT_FOUND)

        # Eigentümer sieht den eigenen Eintrag
        self.auth(self.token)
        detail = self.client.get(reverse("business-detail", args=[business_id]))
        self.assertEqual(detail.status_code, status.HTTP_200_OK)
        mine = self.client.get(reverse("business-mine"))
        self.assertEqual(mine.data["total"], 1)

    def test_unknown_category_creates_nothing(self):
        self.auth(self.token)
        payload = business_payload(self.category)
        payload["category"] = 9999
        self.client.post(self.url, payload, format="json")
        self.assertFalse(Business.objects.exists())

    def test_duplicate_name_409(self):
        make_business(name="Joe's Diner", category=self.category)
        self.auth(self.token)
        res = self.client.post(self.url, business_payload(self.category, name="  JOE'S diner "), format="json")
        self.assertEqual(res.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(Business.objects.count(), 1)

    def test_admin_create_duplicate_name_409(self):
        make_business(name="Joe's Diner", category=self.category, active=False)
        self.auth(self.admin_token)
        res = self.client.post(reverse("admin-businesses"), business_payload(self.category), format="json")
        self.assertEqual(res.status_code, status.HTTP_409_CONFLICT)
