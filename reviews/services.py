"""Review workflows and the business rating aggregate.

A business's `rating_average` / `rating_count` always reflect its approved
reviews: the aggregate is recomputed from scratch whenever a review is
created, approved, edited or deleted, never incremented.
"""

import logging

from django.db import IntegrityError, transaction
from django.db.models import Avg, Count
from django.utils import timezone
from rest_framework.exceptions import PermissionDenied, ValidationError

from activities.models import Activity
from activities.services import record_activity
from businesses.models import Business
from common.exceptions import ConflictError
from common.notifications import notify
from common.permissions import is_admin, is_owner_or_admin
from profiles.models import display_name
from .models import Review

logger = logging.getLogger(__name__)


# ----------------------------- rating aggregate -----------------------------

def recalculate_business_rating(business_id):
    """Write mean (one decimal) and count of approved reviews; 0/0 without any."""
    agg = Review.objects.filter(business_id=business_id, is_approved=True).aggregate(
        avg=Avg("rating"), total=Count("id")
    )
    average = round(float(agg["avg"]), 1) if agg["avg"] is not None else 0.0
    count = agg["total"] or 0
    Business.objects.filter(pk=business_id).update(rating_average=average, rating_count=count)
    return average, count


def refresh_business_rating(business_id) -> None:
    """Best-effort recompute used after review writes."""
    try:
        with transaction.atomic():
            recalculate_business_rating(business_id)
    except Exception:
        logger.exception("Could not recalculate rating for business %s", business_id)


# ----------------------------- review workflows -----------------------------

@transaction.atomic
def create_review(actor, business, data) -> Review:
    """One review per (business, user); it waits for approval before it counts."""
    if business.owner_id == actor.id:
        raise ValidationError({"business": "You cannot review your own business."})
    if Review.objects.filter(business=business, user=actor).exists():
        raise ConflictError("You have already reviewed this business.")
    try:
        with transaction.atomic():
            review = Review.objects.create(business=business, user=actor, is_approved=False, **data)
    except IntegrityError:
        raise ConflictError("You have already reviewed this business.")

    refresh_business_rating(business.id)
    record_activity(
        Activity.Type.REVIEW_SUBMITTED,
        f'{display_name(actor)} reviewed "{business.name}"',
        user=actor,
        business=business,
        review=review,
        metadata={"businessId": business.id, "reviewId": review.id, "rating": review.rating},
    )
    return review


@transaction.atomic
def update_review(actor, review, data) -> Review:
    """Author edits; the review keeps its approval state and the aggregate is recomputed."""
    if not actor.is_authenticated or review.user_id != actor.id:
        raise PermissionDenied("Only the author may edit this review.")
    for attr, value in data.items():
        setattr(review, attr, value)
    review.save()
    refresh_business_rating(review.business_id)
    return review


@transaction.atomic
def delete_review(actor, review) -> None:
    if not is_owner_or_admin(actor, review.user_id):
        raise PermissionDenied("Not authorized to delete this review.")
    business_id, review_id, title = review.business_id, review.id, review.title
    review.delete()
    refresh_business_rating(business_id)

    business = Business.objects.filter(pk=business_id).first()
    record_activity(
        Activity.Type.REVIEW_DELETED,
        f'Review "{title}" was deleted' if title else "A review was deleted",
        user=actor,
        business=business,
        metadata={"businessId": business_id, "reviewId": review_id, "byAdmin": is_admin(actor)},
    )


@transaction.atomic
def approve_review(actor, review) -> Review:
    if not is_admin(actor):
        raise PermissionDenied("Only administrators may approve reviews.")
    if review.is_approved:
        raise ConflictError("Review is already approved.")
    review.is_approved = True
    review.is_reported = False
    review.save(update_fields=["is_approved", "is_reported", "updated_at"])
    refresh_business_rating(review.business_id)

    record_activity(
        Activity.Type.REVIEW_APPROVED,
        f'Review on "{review.business.name}" was approved by admin',
        user=actor,
        business=review.business,
        review=review,
        metadata={"businessId": review.business_id, "reviewId": review.id},
    )
    notify(
        f"Your review of {review.business.name} is live",
        f'Thanks for your review of "{review.business.name}". It is now visible to everyone.',
        review.user.email,
    )
    return review


def toggle_helpful(actor, review):
    """Mark or unmark `review` as helpful for `actor`. Returns (count, marked)."""
    if review.helpful_by.filter(pk=actor.pk).exists():
        review.helpful_by.remove(actor)
        marked = False
    else:
        review.helpful_by.add(actor)
        marked = True
    return review.helpful_by.count(), marked


@transaction.atomic
def respond_to_review(actor, review, comment) -> Review:
    """The business owner (or an admin) answers a review; a second answer replaces the first."""
    if not is_owner_or_admin(actor, review.business.owner_id):
        raise PermissionDenied("Only the business owner may respond to this review.")
    review.response_comment = comment
    review.responded_at = timezone.now()
    review.responded_by = actor
    review.save(update_fields=["response_comment", "responded_at", "responded_by", "updated_at"])
    notify(
        f"{review.business.name} responded to your review",
        f'"{review.business.name}" replied to your review:\n\n{comment}',
        review.user.email,
    )
    return review


def report_review(actor, review) -> Review:
    review.is_reported = True
    review.save(update_fields=["is_reported", "updated_at"])
    logger.info("Review %s reported by user %s", review.id, actor.id)
    return review
