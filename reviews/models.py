"""Reviews app models.

Defines the Review model. A user can leave at most one review per business.
Ratings are constrained between 1 and 5. New reviews wait for admin approval;
only approved reviews are public and count towards the business rating.
"""

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


class Review(models.Model):
    """A rated review of a business, with an optional owner response."""

    business = models.ForeignKey(
        "businesses.Business",
        on_delete=models.CASCADE,
        related_name="reviews",
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="reviews",
    )

    rating = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(5)]
    )
    title = models.CharField(max_length=100, blank=True, default="")
    comment = models.TextField(max_length=1000)
    images = models.JSONField(default=list, blank=True)
    helpful_by = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        related_name="helpful_reviews",
        blank=True,
    )

    # owner response
    response_comment = models.TextField(blank=True, default="")
    responded_at = models.DateTimeField(null=True, blank=True)
    responded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )

    is_approved = models.BooleanField(default=False)
    is_reported = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "reviews"
        constraints = [
            models.UniqueConstraint(
                fields=["business", "user"],
                name="unique_review_per_business_and_user",
            )
        ]
        ordering = ("-created_at", "-id")

    def __str__(self) -> str:
        """Readable representation for admin and debugging."""
        return f"Review<{self.id} {self.user_id}->{self.business_id} {self.rating}>"
