from django.core import mail
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from businesses.models import BusinessClaim
from common.tests.factories import make_business, make_category, make_user
from profiles.models import Profile


class BusinessClaimTests(APITestCase):
    def setUp(self):
        self.category = make_category()
        self.claimant, self.claimant_token = make_user("claimant@example.com")
        self.rival, self.rival_token = make_user("rival@example.com")
        self.admin, self.admin_token = make_user("admin@example.com", role=Profile.Role.ADMIN)
        # von einem Admin angelegt, ohne Eigentümer
        self.business = make_business(owner=None, category=self.category)
        self.claim_url = reverse("business-claim", args=[self.business.id])

    def auth(self, token):
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {token.key}")

    def request_claim(self, token, message="I run this place."):
        self.auth(token)
        return self.client.post(self.claim_url, {"message": message}, format="json")

    def test_request_claim_201(self):
        res = self.request_claim(self.claimant_token)
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["claim"]["status"], "pending")
        self.assertEqual(res.data["claim"]["business"]["id"], self.business.id)

    def test_second_pending_claim_409(self):
        self.request_claim(self.claimant_token)
        res = self.request_claim(self.claimant_token)
        self.assertEqual(res.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(BusinessClaim.objects.count(), 1)

    def test_owned_business_cannot_be_claimed_409(self):
        self.business.owner = self.rival
        self.business.save()
        res = self.request_claim(self.claimant_token)
        self.assertEqual(res.status_code, status.HTTP_409_CONFLICT)

    def test_approve_sets_owner_and_rejects_competing_claims(self):
        self.request_claim(self.claimant_token)
        self.request_claim(self.rival_token)
        claim = BusinessClaim.objects.get(user=self.claimant)

        self.auth(self.admin_token)
        with self.captureOnCommitCallbacks(execute=True):
            res = self.client.post(reverse("admin-claim-approve", args=[claim.id]))
        self.assertEqual(res.status_code, status.HTTP_200_OK)

        self.business.refresh_from_db()
        self.assertEqual(self.business.owner, self.claimant)
        self.assertIsNotNone(self.business.claimed_at)
        self.assertEqual(BusinessClaim.objects.get(user=self.rival).status, BusinessClaim.Status.REJECTED)
        self.claimant.profile.refresh_from_db()
        self.assertEqual(self.claimant.profile.role, Profile.Role.BUSINESS_OWNER)
        self.assertIn("claimant@example.com", mail.outbox[-1].to)

        again = self.client.post(reverse("admin-claim-approve", args=[claim.id]))
        self.assertEqual(again.status_code, status.HTTP_409_CONFLICT)

    def test_reject_claim(self):
        self.request_claim(self.claimant_token)
        claim = BusinessClaim.objects.get()
        self.auth(self.admin_token)
        res = self.client.post(reverse("admin-claim-reject", args=[claim.id]))
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.business.refresh_from_db()
        self.assertIsNone(self.business.owner)

    def test_claim_list_admin_only(self):
        self.request_claim(self.claimant_token)
        res = self.client.get(reverse("admin-claims"))
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

        self.auth(self.admin_token)
        res = self.client.get(reverse("admin-claims"), {"status": "pending"})
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["total"], 1)
        self.assertEqual(res.data["claims"][0]["user"]["email"], "claimant@example.com")

    def test_requires_auth_401(self):
        res = self.client.post(self.claim_url, {}, format="json")
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)
