"""Activities app models.

Defines the append-only Activity log. Entries reference the user, business,
review or category involved; the references are nulled (not cascaded) when
the target is deleted so the audit trail survives.
"""

from django.conf import settings
from django.db import models


class Activity(models.Model):
    """One audit entry describing a mutating action."""

    class Type(models.TextChoices):
        BUSINESS_SUBMITTED = "business_submitted", "business_submitted"
        BUSINESS_CREATED = "business_created", "business_created"
        BUSINESS_APPROVED = "business_approved", "business_approved"
        BUSINESS_REJECTED = "business_rejected", "business_rejected"
        BUSINESS_RESUBMITTED = "business_resubmitted", "business_resubmitted"
        BUSINESS_UPDATED = "business_updated", "business_updated"
        BUSINESS_DELETED = "business_deleted", "business_deleted"
        BUSINESS_FEATURED = "business_featured", "business_featured"
        BUSINESS_UNFEATURED = "business_unfeatured", "business_unfeatured"
        BUSINESS_CLAIM_REQUESTED = "business_claim_requested", "business_claim_requested"
        BUSINESS_CLAIMED = "business_claimed", "business_claimed"
        REVIEW_SUBMITTED = "review_submitted", "review_submitted"
        REVIEW_APPROVED = "review_approved", "review_approved"
        REVIEW_DELETED = "review_deleted", "review_deleted"
        CATEGORY_CREATED = "category_created", "category_created"
        CATEGORY_UPDATED = "category_updated", "category_updated"
        CATEGORY_DELETED = "category_deleted", "category_deleted"
        USER_REGISTERED = "user_registered", "user_registered"
        USER_UPDATED = "user_updated", "user_updated"
        USER_DELETED = "user_deleted", "user_deleted"
        CONTACT_SUBMITTED = "contact_submitted", "contact_submitted"

    type = models.CharField(max_length=50, choices=Type.choices)
    description = models.TextField()
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="activities",
    )
    business = models.ForeignKey(
        "businesses.Business",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="activities",
    )
    review = models.ForeignKey(
        "reviews.Review",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="activities",
    )
    category = models.ForeignKey(
        "categories.Category",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="activities",
    )
    metadata = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "activities"
        ordering = ("-created_at", "-id")

    def __str__(self) -> str:
        return f"Activity<{self.id} {self.type}>"
