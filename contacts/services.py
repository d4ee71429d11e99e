"""Support ticket workflows.

Creating a ticket never fails because of its side effects: the activity entry
and both e-mails (admin notice, submitter confirmation) are best-effort.
"""

import logging

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from activities.models import Activity
from activities.services import record_activity
from common.notifications import notify, notify_admin
from .models import ContactTicket

logger = logging.getLogger(__name__)


@transaction.atomic
def submit_ticket(data, actor=None) -> ContactTicket:
    ticket = ContactTicket.objects.create(status=ContactTicket.Status.NEW, **data)

    record_activity(
        Activity.Type.CONTACT_SUBMITTED,
        f'New support request from "{ticket.name}" - {ticket.subject}',
        user=actor,
        metadata={"contactName": ticket.name, "contactEmail": ticket.email, "subject": ticket.subject},
    )
    notify_admin(
        f"Support Request: {ticket.subject}",
        "New support request from CityLocal 101:\n\n"
        f"Name: {ticket.name}\nEmail: {ticket.email}\nSubject: {ticket.subject}\n\n"
        f"Message:\n{ticket.message}\n",
    )
    notify(
        "We received your message - CityLocal 101",
        f"Hi {ticket.name},\n\nThanks for contacting CityLocal 101. We received your message "
        f'"{ticket.subject}" and will respond within 24 hours.\n\n'
        f"If this is urgent, reply to {settings.ADMIN_EMAIL}.",
        ticket.email,
    )
    logger.info("Contact ticket %s created", ticket.id)
    return ticket


def update_ticket(ticket, status=None, replied=False) -> ContactTicket:
    """Admin status change; timestamps follow the status."""
    now = timezone.now()
    if status is not None:
        ticket.status = status
        if status != ContactTicket.Status.NEW:
            ticket.is_read = True
        if status == ContactTicket.Status.RESOLVED and ticket.resolved_at is None:
            ticket.resolved_at = now
        elif status != ContactTicket.Status.RESOLVED:
            ticket.resolved_at = None
    if replied:
        ticket.replied_at = now
        ticket.is_read = True
    ticket.save()
    return ticket
