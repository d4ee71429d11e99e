"""Contacts app models.

Support tickets submitted through the public contact form. Only admins move
a ticket through its statuses.
"""

from django.db import models


class ContactTicket(models.Model):
    """One message sent through the contact form."""

    class Status(models.TextChoices):
        NEW = "new", "new"
        READ = "read", "read"
        IN_PROGRESS = "in_progress", "in_progress"
        RESOLVED = "resolved", "resolved"

    name = models.CharField(max_length=100)
    email = models.EmailField(max_length=254)
    subject = models.CharField(max_length=200)
    message = models.TextField(max_length=5000)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.NEW)
    is_read = models.BooleanField(default=False)
    replied_at = models.DateTimeField(null=True, blank=True)
    resolved_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "contacts"
        ordering = ("-created_at", "-id")

    def __str__(self):
        return f"ContactTicket<{self.id} {self.email} {self.status}>"
