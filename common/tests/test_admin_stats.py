from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from common.tests.factories import make_business, make_user
from contacts.models import ContactTicket
from profiles.models import Profile
from reviews.models import Review


class AdminStatsTests(APITestCase):
    def setUp(self):
        self.admin, self.admin_token = make_user("admin@example.com", role=Profile.Role.ADMIN)
        self.url = reverse("admin-stats")

    def test_requires_admin(self):
        _, token = make_user("user@example.com")
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {token.key}")
        self.assertEqual(self.client.get(self.url).status_code, status.HTTP_403_FORBIDDEN)

        self.client.credentials()
        self.assertEqual(self.client.get(self.url).status_code, status.HTTP_401_UNAUTHORIZED)

    def test_counts_and_recent(self):
        owner, _ = make_user("owner@example.com", role=Profile.Role.BUSINESS_OWNER)
        live = make_business(owner=owner)
        make_business(owner=owner, active=False, name="Waiting Room")
        make_business(owner=owner, active=False, name="Nope Shop", rejection_reason="Incomplete")
        Review.objects.create(business=live, user=self.admin, rating=3, title="ok", comment="fine")
        ContactTicket.objects.create(name="A", email="a@example.com", subject="Hi", message="Hello")

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {self.admin_token.key}")
        resp = self.client.get(self.url)
        self.assertEqual(resp.status_code, status.HTTP_200_OK)

        stats = resp.data["stats"]
        self.assertEqual(stats["total_users"], 2)
        self.assertEqual(stats["total_businesses"], 3)
        self.assertEqual(stats["active_businesses"], 1)
        self.assertEqual(stats["pending_businesses"], 1)
        self.assertEqual(stats["rejected_businesses"], 1)
        self.assertEqual(stats["pending_reviews"], 1)
        self.assertEqual(stats["unread_contacts"], 1)
        self.assertEqual(len(resp.data["recent_businesses"]), 3)
        self.assertEqual(resp.data["recent_reviews"][0]["rating"], 3)
        self.assertEqual(resp.data["recent_contacts"][0]["subject"], "Hi")
