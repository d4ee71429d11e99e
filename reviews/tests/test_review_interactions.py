from django.core import mail
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from common.tests.factories import make_business, make_user
from profiles.models import Profile
from reviews.models import Review


class ReviewInteractionTests(APITestCase):
    def setUp(self):
        self.owner, self.owner_token = make_user("owner@example.com", role=Profile.Role.BUSINESS_OWNER)
        self.author, self.author_token = make_user("author@example.com")
        self.reader, self.reader_token = make_user("reader@example.com")
        self.admin, self.admin_token = make_user("admin@example.com", role=Profile.Role.ADMIN)
        self.business = make_business(owner=self.owner)
        self.review = Review.objects.create(
            business=self.business, user=self.author, rating=4, title="Solid", comment="Good", is_approved=True
        )

    def auth(self, token):
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {token.key}")

    def test_helpful_toggles(self):
        url = reverse("review-helpful", args=[self.review.id])
        self.auth(self.reader_token)
        res = self.client.post(url)
        self.assertEqual(res.data, {"helpful_count": 1, "marked": True})
        res = self.client.post(url)
        self.assertEqual(res.data, {"helpful_count": 0, "marked": False})

    def test_helpful_count_in_listing(self):
        self.review.helpful_by.add(self.reader, self.owner)
        res = self.client.get(reverse("review-list"), {"business": self.business.id})
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["reviews"][0]["helpful_count"], 2)

    def test_owner_responds(self):
        self.auth(self.owner_token)
        with self.captureOnCommitCallbacks(execute=True):
            res = self.client.post(
                reverse("review-respond", args=[self.review.id]), {"comment": "Thanks!"}, format="json"
            )
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["review"]["response"]["comment"], "Thanks!")
        self.assertEqual(mail.outbox[0].to, ["author@example.com"])

    def test_other_user_cannot_respond_403(self):
        self.auth(self.reader_token)
        res = self.client.post(
            reverse("review-respond", args=[self.review.id]), {"comment": "Hi"}, format="json"
        )
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_report_flags_review(self):
        self.auth(self.reader_token)
        res = self.client.post(reverse("review-report", args=[self.review.id]))
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.review.refresh_from_db()
        self.assertTrue(self.review.is_reported)

        self.auth(self.admin_token)
        res = self.client.get(reverse("admin-reviews"), {"status": "reported"})
        self.assertEqual([r["id"] for r in res.data["reviews"]], [self.review.id])

    def test_patch_only_allowed_fields_400(self):
        self.auth(self.author_token)
        res = self.client.patch(
            reverse("review-detail", args=[self.review.id]), {"is_approved": False}, format="json"
        )
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_patch_with_list_body_400(self):
        self.auth(self.author_token)
        res = self.client.patch(reverse("review-detail", args=[self.review.id]), [1, 2], format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data["error"], "Expected a JSON object.")

    def test_non_author_cannot_patch_403_and_anonymous_401(self):
        url = reverse("review-detail", args=[self.review.id])
        self.assertEqual(self.client.patch(url, {"rating": 1}, format="json").status_code, 401)
        self.auth(self.reader_token)
        self.assertEqual(self.client.patch(url, {"rating": 1}, format="json").status_code, 403)
        self.assertEqual(self.client.delete(url).status_code, 403)

    def test_unapproved_review_hidden_from_others(self):
        pending = Review.objects.create(business=self.business, user=self.reader, rating=2, comment="meh")
        url = reverse("review-detail", args=[pending.id])
        self.assertEqual(self.client.get(url).status_code, status.HTTP_404_NOT_FOUND)
        self.auth(self.reader_token)
        self.assertEqual(self.client.get(url).status_code, status.HTTP_200_OK)
