from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from activities.models import Activity
from common.tests.factories import make_business, make_user
from profiles.models import Profile
from reviews.models import Review


class ReviewCreateTests(APITestCase):
    def setUp(self):
        self.url = reverse("review-list")
        self.owner, self.owner_token = make_user("owner@example.com", role=Profile.Role.BUSINESS_OWNER)
        self.cust, self.cust_token = make_user("cust@example.com", name="Cust")
        self.business = make_business(owner=self.owner)
        self.payload = {"business": self.business.id, "rating": 5, "title": "Great", "comment": "Hervorragend!"}

    def auth(self, token):
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {token.key}")

    def test_create_review_is_pending_201(self):
        self.auth(self.cust_token)
        res = self.client.post(self.url, self.payload, format="json")
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        review = res.data["review"]
        self.assertFalse(review["is_approved"])
        self.assertEqual(review["user"]["id"], self.cust.id)
        self.assertEqual(review["helpful_count"], 0)
        self.assertIsNone(review["response"])
        # unfreigegeben -> zählt nicht in die Bewertung
        self.business.refresh_from_db()
        self.assertEqual((self.business.rating_average, self.business.rating_count), (0.0, 0))
        self.assertTrue(Activity.objects.filter(type=Activity.Type.REVIEW_SUBMITTED).exists())

    def test_pending_review_not_public(self):
        self.auth(self.cust_token)
        self.client.post(self.url, self.payload, format="json")
        self.client.credentials()
        res = self.client.get(self.url, {"business": self.business.id})
        self.assertEqual(res.data["reviews"], [])

    def test_duplicate_review_409_and_aggregate_untouched(self):
        Review.objects.create(business=self.business, user=self.cust, rating=4, comment="ok", is_approved=True)
        self.business.rating_average, self.business.rating_count = 4.0, 1
        self.business.save()

        self.auth(self.cust_token)
        res = self.client.post(self.url, self.payload, format="json")
        self.assertEqual(res.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(Review.objects.count(), 1)
        self.business.refresh_from_db()
        self.assertEqual((self.business.rating_average, self.business.rating_count), (4.0, 1))

    def test_owner_cannot_review_own_business_400(self):
        self.auth(self.owner_token)
        res = self.client.post(self.url, self.payload, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_invalid_rating_400(self):
        self.auth(self.cust_token)
        for rating in (0, 6, "x"):
            res = self.client.post(self.url, {**self.payload, "rating": rating}, format="json")
            self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_inactive_business_400(self):
        hidden = make_business(name="Hidden", active=False)
        self.auth(self.cust_token)
        res = self.client.post(self.url, {**self.payload, "business": hidden.id}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("Business not found.", res.data["error"])

    def test_requires_auth_401(self):
        res = self.client.post(self.url, self.payload, format="json")
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)
