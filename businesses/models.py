"""Businesses app models.

Defines the Business listing and the BusinessClaim request. A listing's
moderation state is derived from `is_active` and `rejection_reason`:

- pending:  not active, no rejection reason
- rejected: not active, rejection reason set
- active:   active (and verified)

State changes go through `businesses.services`, never through a generic patch.
"""

import time

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils.text import slugify

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")
MAX_IMAGES = 10
MAX_VIDEOS = 5


def tags_to_text(tags) -> str:
    """Newline-separated, lower-cased tag strings."""
    return "\n".join(str(tag).strip().lower() for tag in (tags or []) if str(tag).strip())


def build_business_slug(name: str) -> str:
    """Slug from the name plus the creation timestamp in milliseconds, made unique."""
    base = slugify(name)[:120] or "business"
    slug = f"{base}-{int(time.time() * 1000)}"
    candidate, n = slug, 1
    while Business.objects.filter(slug=candidate).exists():
        n += 1
        candidate = f"{slug}-{n}"
    return candidate


class Business(models.Model):
    """A directory listing for a real-world business."""

    class Status(models.TextChoices):
        PENDING = "pending", "pending"
        REJECTED = "rejected", "rejected"
        ACTIVE = "active", "active"

    name = models.CharField(max_length=100)
    slug = models.SlugField(max_length=150, unique=True)
    description = models.TextField(max_length=2000)
    category = models.ForeignKey(
        "categories.Category",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="businesses",
    )
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="businesses",
    )

    # location
    address = models.CharField(max_length=255)
    city = models.CharField(max_length=100)
    state = models.CharField(max_length=50)
    zip_code = models.CharField(max_length=10, blank=True, default="")
    country = models.CharField(max_length=50, default="USA")
    latitude = models.DecimalField(max_digits=10, decimal_places=8, null=True, blank=True)
    longitude = models.DecimalField(max_digits=11, decimal_places=8, null=True, blank=True)

    # contact
    phone = models.CharField(max_length=20)
    email = models.EmailField(max_length=100, blank=True, default="")
    website = models.URLField(max_length=255, blank=True, default="")

    hours = models.JSONField(default=dict, blank=True)
    tags = models.JSONField(default=list, blank=True)
    # lower-cased tags, one per line; searched instead of the JSON text
    tags_text = models.TextField(blank=True, default="", editable=False)
    logo = models.CharField(max_length=500, blank=True, default="")
    images = models.JSONField(default=list, blank=True)
    videos = models.JSONField(default=list, blank=True)

    # lifecycle / derived
    is_active = models.BooleanField(default=False)
    is_verified = models.BooleanField(default=False)
    is_featured = models.BooleanField(default=False)
    views = models.PositiveIntegerField(default=0)
    rating_average = models.FloatField(
        default=0.0, validators=[MinValueValidator(0), MaxValueValidator(5)]
    )
    rating_count = models.PositiveIntegerField(default=0)
    claimed_at = models.DateTimeField(null=True, blank=True)
    rejection_reason = models.TextField(blank=True, default="")
    rejected_at = models.DateTimeField(null=True, blank=True)
    approved_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "businesses"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["is_active", "category"], name="businesses_active_category_idx"),
            models.Index(fields=["city", "state"], name="businesses_city_state_idx"),
        ]

    def save(self, *args, **kwargs):
        self.tags_text = tags_to_text(self.tags)
        update_fields = kwargs.get("update_fields")
        if update_fields is not None and "tags" in update_fields:
            kwargs["update_fields"] = {*update_fields, "tags_text"}
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.name} (#{self.pk})"

    @property
    def status(self) -> str:
        if self.is_active:
            return self.Status.ACTIVE
        if self.rejection_reason:
            return self.Status.REJECTED
        return self.Status.PENDING


class BusinessClaim(models.Model):
    """A user's request to take over an unowned listing; decided by an admin."""

    class Status(models.TextChoices):
        PENDING = "pending", "pending"
        APPROVED = "approved", "approved"
        REJECTED = "rejected", "rejected"

    business = models.ForeignKey(Business, on_delete=models.CASCADE, related_name="claims")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="business_claims",
    )
    message = models.TextField(blank=True, default="")
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING)
    decided_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )
    decided_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "business_claims"
        ordering = ("-created_at", "-id")
        constraints = [
            models.UniqueConstraint(
                fields=["business", "user"],
                condition=models.Q(status="pending"),
                name="unique_pending_claim_per_business_and_user",
            )
        ]

    def __str__(self) -> str:
        return f"BusinessClaim<{self.id} {self.user_id}->{self.business_id} {self.status}>"
