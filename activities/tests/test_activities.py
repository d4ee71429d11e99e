from unittest import mock

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from activities.models import Activity
from activities.services import record_activity
from common.tests.factories import make_business, make_user
from profiles.models import Profile


class RecordActivityTests(APITestCase):
    def test_records_entry(self):
        user, _ = make_user("a@example.com")
        business = make_business()
        record_activity(Activity.Type.BUSINESS_UPDATED, "updated", user=user, business=business, metadata={"x": 1})
        entry = Activity.objects.get()
        self.assertEqual(entry.user, user)
        self.assertEqual(entry.business, business)
        self.assertEqual(entry.metadata, {"x": 1})

    def test_failure_is_logged_not_raised(self):
        with mock.patch.object(Activity.objects, "create", side_effect=RuntimeError("boom")):
            with self.assertLogs("activities.services", level="ERROR"):
                record_activity(Activity.Type.BUSINESS_UPDATED, "updated")
        self.assertFalse(Activity.objects.exists())

    def test_reference_nulled_when_target_deleted(self):
        business = make_business()
        record_activity(Activity.Type.BUSINESS_UPDATED, "updated", business=business)
        business.delete()
        entry = Activity.objects.get()
        self.assertIsNone(entry.business_id)


class AdminActivityFeedTests(APITestCase):
    def setUp(self):
        _, token = make_user("admin@example.com", role=Profile.Role.ADMIN)
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {token.key}")
        self.url = reverse("admin-activities")
        business = make_business()
        record_activity(Activity.Type.BUSINESS_APPROVED, "first", business=business)
        record_activity(Activity.Type.CONTACT_SUBMITTED, "second")

    def test_feed_newest_first(self):
        resp = self.client.get(self.url)
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["total"], 2)
        self.assertEqual([a["description"] for a in resp.data["activities"]], ["second", "first"])
        self.assertEqual(resp.data["activities"][1]["business"]["name"], "Joe's Diner")
        self.assertIsNone(resp.data["activities"][0]["business"])

    def test_filter_by_type(self):
        resp = self.client.get(self.url, {"type": "business_approved"})
        self.assertEqual([a["description"] for a in resp.data["activities"]], ["first"])

    def test_unknown_type_400(self):
        resp = self.client.get(self.url, {"type": "nonsense"})
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)

    def test_non_admin_403(self):
        _, token = make_user("user@example.com")
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {token.key}")
        self.assertEqual(self.client.get(self.url).status_code, status.HTTP_403_FORBIDDEN)
