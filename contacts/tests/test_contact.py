from unittest import mock

from django.core import mail
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from activities.models import Activity
from common.tests.factories import make_user
from contacts.models import ContactTicket
from profiles.models import Profile


class ContactSubmitTests(APITestCase):
    def setUp(self):
        self.url = reverse("contact")
        self.payload = {
            "name": "Pat",
            "email": "pat@example.com",
            "subject": "Listing question",
            "message": "How do I add photos?",
        }

    def test_anonymous_submit_sends_two_mails_201(self):
        with self.captureOnCommitCallbacks(execute=True):
            res = self.client.post(self.url, self.payload, format="json")
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["contact"]["status"], "new")
        self.assertEqual(len(mail.outbox), 2)
        recipients = sorted(m.to[0] for m in mail.outbox)
        self.assertEqual(recipients, ["admin@citylocal101.com", "pat@example.com"])
        self.assertTrue(Activity.objects.filter(type=Activity.Type.CONTACT_SUBMITTED).exists())

    def test_missing_fields_400(self):
        res = self.client.post(self.url, {"name": " ", "email": "nope"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        for field in ("name", "email", "subject", "message"):
            self.assertIn(field, res.data["errors"])
        self.assertIn("Valid email is required", res.data["error"])
        self.assertFalse(ContactTicket.objects.exists())

    def test_mail_failure_does_not_fail_submission(self):
        with mock.patch("common.notifications.send_mail", side_effect=OSError("smtp down")):
            with self.assertLogs("common.notifications", level="ERROR"):
                with self.captureOnCommitCallbacks(execute=True):
                    res = self.client.post(self.url, self.payload, format="json")
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(ContactTicket.objects.count(), 1)

    def test_activity_failure_does_not_fail_submission(self):
        with mock.patch("activities.services.Activity.objects.create", side_effect=RuntimeError("boom")):
            with self.assertLogs("activities.services", level="ERROR"):
                res = self.client.post(self.url, self.payload, format="json")
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(ContactTicket.objects.count(), 1)

    def test_my_tickets_matches_email(self):
        user, token = make_user("Pat@Example.com")
        self.client.post(self.url, self.payload, format="json")
        ContactTicket.objects.create(name="X", email="x@example.com", subject="s", message="m")
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {token.key}")
        res = self.client.get(reverse("contact-my-tickets"))
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["count"], 1)
        self.assertEqual(res.data["contacts"][0]["subject"], "Listing question")


class AdminContactTests(APITestCase):
    def setUp(self):
        self.admin, self.admin_token = make_user("admin@example.com", role=Profile.Role.ADMIN)
        self.user, self.user_token = make_user("user@example.com")
        self.ticket = ContactTicket.objects.create(name="Pat", email="pat@example.com", subject="Hi", message="Hello")
        self.url = reverse("admin-contact-detail", args=[self.ticket.id])

    def auth(self, token):
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {token.key}")

    def test_list_requires_admin(self):
        self.auth(self.user_token)
        self.assertEqual(self.client.get(reverse("admin-contacts")).status_code, status.HTTP_403_FORBIDDEN)
        self.auth(self.admin_token)
        res = self.client.get(reverse("admin-contacts"), {"status": "new"})
        self.assertEqual(res.data["total"], 1)

    def test_status_changes_stamp_fields(self):
        self.auth(self.admin_token)
        res = self.client.patch(self.url, {"status": "in_progress", "replied": True}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.ticket.refresh_from_db()
        self.assertTrue(self.ticket.is_read)
        self.assertIsNotNone(self.ticket.replied_at)
        self.assertIsNone(self.ticket.resolved_at)

        self.client.patch(self.url, {"status": "resolved"}, format="json")
        self.ticket.refresh_from_db()
        self.assertIsNotNone(self.ticket.resolved_at)

    def test_invalid_status_or_fields_400(self):
        self.auth(self.admin_token)
        self.assertEqual(self.client.patch(self.url, {"status": "closed"}, format="json").status_code, 400)
        self.assertEqual(self.client.patch(self.url, {"subject": "x"}, format="json").status_code, 400)
        # Liste statt Objekt
        self.assertEqual(self.client.patch(self.url, ["status"], format="json").status_code, 400)

    def test_delete(self):
        self.auth(self.admin_token)
        res = self.client.delete(self.url)
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertFalse(ContactTicket.objects.exists())
