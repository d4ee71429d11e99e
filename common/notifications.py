"""Best-effort e-mail notifications.

Mails are handed to Django's e-mail backend after the surrounding transaction
commits. Delivery failures are logged and never reach the caller.
"""

import logging

from django.conf import settings
from django.core.mail import send_mail
from django.db import transaction

logger = logging.getLogger(__name__)


def _deliver(subject: str, message: str, recipients: list[str]) -> None:
    try:
        send_mail(
            subject,
            message,
            settings.DEFAULT_FROM_EMAIL,
            recipients,
            fail_silently=False,
        )
        logger.info("Notification '%s' sent to %s", subject, ", ".join(recipients))
    except Exception:
        logger.exception("Failed to send notification '%s' to %s", subject, ", ".join(recipients))


def notify(subject: str, message: str, recipients) -> None:
    """Schedule a plain-text mail; empty recipient lists are ignored."""
    if isinstance(recipients, str):
        recipients = [recipients]
    recipients = [r for r in (recipients or []) if r]
    if not recipients:
        return
    transaction.on_commit(lambda: _deliver(subject, message, recipients))


def notify_admin(subject: str, message: str) -> None:
    notify(subject, message, settings.ADMIN_EMAIL)


def dashboard_url(path: str = "/business-dashboard") -> str:
    return f"{settings.FRONTEND_URL.rstrip('/')}{path}"
