from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from activities.models import Activity
from businesses.models import Business
from common.tests.factories import make_business, make_category, make_user
from profiles.models import Profile
from reviews.models import Review


class BusinessDetailTests(APITestCase):
    def setUp(self):
        self.category = make_category()
        self.owner, self.owner_token = make_user("owner@example.com", role=Profile.Role.BUSINESS_OWNER)
        self.other, self.other_token = make_user("other@example.com")
        self.admin, self.admin_token = make_user("admin@example.com", role=Profile.Role.ADMIN)
        self.business = make_business(owner=self.owner, category=self.category)
        self.url = reverse("business-detail", args=[self.business.id])

    def auth(self, token):
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {token.key}")

    def test_each_read_counts_one_view(self):
        for expected in (1, 2, 3):
            res = self.client.get(self.url)
            self.assertEqual(res.status_code, status.HTTP_200_OK)
            self.assertEqual(res.data["business"]["views"], expected)
        self.business.refresh_from_db()
        self.assertEqual(self.business.views, 3)

    def test_unknown_id_404(self):
        res = self.client.get(reverse("business-detail", args=[9999]))
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
        self.assertIn("error", res.data)

    def test_owner_can_patch(self):
        self.auth(self.owner_token)
        res = self.client.patch(self.url, {"phone": "555-0111", "tags": ["brunch"]}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["business"]["phone"], "555-0111")
        self.assertEqual(res.data["business"]["tags"], ["brunch"])
        self.assertTrue(Activity.objects.filter(type=Activity.Type.BUSINESS_UPDATED).exists())

    def test_patch_lifecycle_field_400(self):
        self.auth(self.owner_token)
        res = self.client.patch(self.url, {"is_featured": True, "views": 1000}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("is_featured", res.data["error"])
        self.business.refresh_from_db()
        self.assertFalse(self.business.is_featured)
        self.assertEqual(self.business.views, 0)

    def test_admin_can_patch_foreign_listing(self):
        self.auth(self.admin_token)
        res = self.client.patch(self.url, {"name": "Joe's Grill"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)

    def test_other_user_cannot_patch_or_delete_403(self):
        self.auth(self.other_token)
        self.assertEqual(self.client.patch(self.url, {"name": "Mine"}, format="json").status_code, 403)
        self.assertEqual(self.client.delete(self.url).status_code, 403)

    def test_requires_auth_401(self):
        res = self.client.patch(self.url, {"name": "Mine"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_delete_removes_reviews(self):
        Review.objects.create(business=self.business, user=self.other, rating=4, title="Nice", comment="Good food")
        self.auth(self.owner_token)
        res = self.client.delete(self.url)
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertFalse(Business.objects.filter(pk=self.business.id).exists())
        self.assertFalse(Review.objects.exists())
        deleted = Activity.objects.get(type=Activity.Type.BUSINESS_DELETED)
        self.assertIsNone(deleted.business)
        self.assertEqual(deleted.metadata["businessId"], self.business.id)

    def test_deleting_category_uncategorizes(self):
        self.category.delete()
        res = self.client.get(self.url)
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertIsNone(res.data["business"]["category"])

    def test_rename_to_taken_name_409(self):
        make_business(name="Corner Books", category=self.category)
        self.auth(self.owner_token)
        res = self.client.patch(self.url, {"name": "corner books"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_409_CONFLICT)
        self.business.refresh_from_db()
        self.assertEqual(self.business.name, "Joe's Diner")

    def test_keeping_own_name_is_fine(self):
        self.auth(self.owner_token)
        res = self.client.patch(self.url, {"name": "JOE'S DINER"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)

    def test_patch_with_list_body_400(self):
        self.auth(self.owner_token)
        res = self.client.patch(self.url, [{"name": "x"}], format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
