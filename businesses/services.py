"""Business moderation lifecycle.

Every operation takes the acting user explicitly (`actor`) and enforces who
may perform it. State transitions:

    submit            -> pending
    approve           pending | rejected -> active
    reject/withdraw   pending | active   -> rejected
    resubmit          rejected           -> pending

Featuring, generic updates and claims leave the moderation state untouched.
Activity entries and e-mails are best-effort side effects.
"""

import logging

from django.db import transaction
from django.db.models import F
from django.utils import timezone
from rest_framework.exceptions import PermissionDenied, ValidationError

from activities.models import Activity
from activities.services import record_activity
from common.exceptions import ConflictError
from common.notifications import dashboard_url, notify, notify_admin
from common.permissions import is_admin
from profiles.models import display_name, promote_to_business_owner
from .models import Business, BusinessClaim, build_business_slug

logger = logging.getLogger(__name__)

# Fields only the named transitions (or the system) may write.
LIFECYCLE_FIELDS = frozenset(
    {
        "is_active",
        "is_verified",
        "is_featured",
        "views",
        "rating",
        "rating_average",
        "rating_count",
        "claimed_at",
        "rejection_reason",
        "rejected_at",
        "approved_at",
        "owner",
        "slug",
        "status",
    }
)


# ----------------------------- guards -----------------------------

def _ensure_admin(actor):
    if not is_admin(actor):
        raise PermissionDenied("Only administrators may perform this action.")


def _ensure_owner(actor, business):
    if not actor or not actor.is_authenticated or business.owner_id != actor.id:
        raise PermissionDenied("Only the business owner may perform this action.")


def _ensure_owner_or_admin(actor, business, action="modify"):
    if is_admin(actor):
        return
    if not actor or not actor.is_authenticated or business.owner_id != actor.id:
        raise PermissionDenied(f"Not authorized to {action} this business.")


def _ensure_unique_name(name, exclude=None):
    """Business names are unique, compared case-insensitively after trimming."""
    others = Business.objects.filter(name__iexact=(name or "").strip())
    if exclude is not None:
        others = others.exclude(pk=exclude.pk)
    if others.exists():
        raise ConflictError("A business with this name already exists.")


def _apply(business, data):
    for attr, value in (data or {}).items():
        setattr(business, attr, value)


def _owner_email(business) -> str:
    owner = business.owner
    return owner.email if owner is not None else ""


# ----------------------------- creation -----------------------------

@transaction.atomic
def submit_business(actor, data) -> Business:
    """Create a pending listing owned by `actor` (validated data expected)."""
    if not actor or not actor.is_authenticated:
        raise PermissionDenied("Authentication required.")
    _ensure_unique_name(data["name"])

    business = Business(
        **data,
        owner=actor,
        slug=build_business_slug(data["name"]),
        is_active=False,
        is_verified=False,
    )
    business.save()

    if not is_admin(actor):
        promote_to_business_owner(actor)

    record_activity(
        Activity.Type.BUSINESS_SUBMITTED,
        f'New business "{business.name}" was submitted for approval',
        user=actor,
        business=business,
        metadata={"businessName": business.name, "ownerName": display_name(actor), "businessId": business.id},
    )
    notify_admin(
        f"New business submitted: {business.name}",
        f'{display_name(actor)} submitted "{business.name}" ({business.city}, {business.state}) '
        f"for approval.",
    )
    logger.info("Business %s submitted by user %s", business.id, actor.id)
    return business


@transaction.atomic
def create_approved_business(actor, data, owner=None) -> Business:
    """Admin shortcut: create a listing that is live immediately."""
    _ensure_admin(actor)
    _ensure_unique_name(data["name"])
    now = timezone.now()
    business = Business(
        **data,
        owner=owner,
        slug=build_business_slug(data["name"]),
        is_active=True,
        is_verified=True,
        approved_at=now,
        claimed_at=now if owner is not None else None,
    )
    business.save()
    if owner is not None:
        promote_to_business_owner(owner)

    record_activity(
        Activity.Type.BUSINESS_CREATED,
        f'Business "{business.name}" was created by admin',
        user=actor,
        business=business,
        metadata={"businessName": business.name, "businessId": business.id},
    )
    return business


# ----------------------------- moderation -----------------------------

@transaction.atomic
def approve_business(actor, business) -> Business:
    _ensure_admin(actor)
    if business.status == Business.Status.ACTIVE:
        raise ConflictError("Business is already approved.")

    business.is_active = True
    business.is_verified = True
    business.rejection_reason = ""
    business.rejected_at = None
    business.approved_at = timezone.now()
    business.save(
        update_fields=["is_active", "is_verified", "rejection_reason", "rejected_at", "approved_at", "updated_at"]
    )

    record_activity(
        Activity.Type.BUSINESS_APPROVED,
        f'Business "{business.name}" was approved by admin',
        user=actor,
        business=business,
        metadata={"businessName": business.name, "businessId": business.id},
    )
    notify(
        f"Your business listing has been approved - {business.name}",
        f'Great news! "{business.name}" is now live on CityLocal 101.\n\n'
        f"Manage your listing: {dashboard_url()}",
        _owner_email(business),
    )
    return business


@transaction.atomic
def reject_business(actor, business, reason) -> Business:
    """Admin rejection, or the owner withdrawing their own listing."""
    _ensure_owner_or_admin(actor, business, "reject")
    by_admin = is_admin(actor)
    reason = (reason or "").strip()
    if not reason:
        raise ValidationError({"rejection_reason": "Rejection reason is required."})
    if business.status == Business.Status.REJECTED:
        raise ConflictError("Business is already rejected.")

    business.is_active = False
    business.is_verified = False
    business.rejection_reason = reason
    business.rejected_at = timezone.now()
    business.approved_at = None
    business.save(
        update_fields=["is_active", "is_verified", "rejection_reason", "rejected_at", "approved_at", "updated_at"]
    )

    record_activity(
        Activity.Type.BUSINESS_REJECTED,
        f'Business "{business.name}" was rejected by {"admin" if by_admin else "its owner"}',
        user=actor,
        business=business,
        metadata={
            "businessName": business.name,
            "businessId": business.id,
            "rejectionReason": reason,
            "byAdmin": by_admin,
        },
    )
    if by_admin:
        notify(
            f"Business listing review - {business.name}",
            f'We reviewed "{business.name}" and need some changes before it can go live.\n\n'
            f"Reason: {reason}\n\nUpdate and resubmit your listing: {dashboard_url()}",
            _owner_email(business),
        )
    return business


@transaction.atomic
def resubmit_business(actor, business, data=None) -> Business:
    """Owner sends a rejected listing back to the moderation queue."""
    _ensure_owner(actor, business)
    if business.status != Business.Status.REJECTED:
        raise ConflictError("Only rejected businesses can be resubmitted.")
    if data and "name" in data:
        _ensure_unique_name(data["name"], exclude=business)

    _apply(business, data)
    business.rejection_reason = ""
    business.rejected_at = None
    business.is_active = False
    business.is_verified = False
    business.save()

    record_activity(
        Activity.Type.BUSINESS_RESUBMITTED,
        f'Business "{business.name}" was resubmitted for approval',
        user=actor,
        business=business,
        metadata={"businessName": business.name, "businessId": business.id},
    )
    notify_admin(
        f"Business resubmitted: {business.name}",
        f'{display_name(actor)} resubmitted "{business.name}" after a rejection.',
    )
    return business


# ----------------------------- owner / admin edits -----------------------------

@transaction.atomic
def update_business(actor, business, data) -> Business:
    """Generic patch by owner or admin; lifecycle fields are refused."""
    _ensure_owner_or_admin(actor, business, "update")
    forbidden = LIFECYCLE_FIELDS.intersection(data or {})
    if forbidden:
        raise ValidationError(
            {"detail": f"These fields cannot be changed here: {', '.join(sorted(forbidden))}."}
        )

    if data and "name" in data:
        _ensure_unique_name(data["name"], exclude=business)
    _apply(business, data)
    business.save()
    record_activity(
        Activity.Type.BUSINESS_UPDATED,
        f'Business "{business.name}" was updated',
        user=actor,
        business=business,
        metadata={"businessId": business.id, "fields": sorted(data or {})},
    )
    return business


@transaction.atomic
def delete_business(actor, business) -> None:
    """Hard delete; the listing's reviews and claims go with it."""
    _ensure_owner_or_admin(actor, business, "delete")
    business_id, name = business.id, business.name
    business.delete()

    record_activity(
        Activity.Type.BUSINESS_DELETED,
        f'Business "{name}" was deleted',
        user=actor,
        metadata={"businessName": name, "businessId": business_id},
    )
    logger.info("Business %s deleted by user %s", business_id, actor.id)


@transaction.atomic
def toggle_featured(actor, business) -> Business:
    """Flip `is_featured`. Not idempotent: every call toggles."""
    _ensure_admin(actor)
    business.is_featured = not business.is_featured
    business.save(update_fields=["is_featured", "updated_at"])

    if business.is_featured:
        activity_type, verb = Activity.Type.BUSINESS_FEATURED, "featured"
    else:
        activity_type, verb = Activity.Type.BUSINESS_UNFEATURED, "unfeatured"
    record_activity(
        activity_type,
        f'Business "{business.name}" was {verb} by admin',
        user=actor,
        business=business,
        metadata={"businessName": business.name, "businessId": business.id, "isFeatured": business.is_featured},
    )
    return business


def record_view(business) -> Business:
    """Count one detail read with an atomic increment."""
    Business.objects.filter(pk=business.pk).update(views=F("views") + 1)
    business.refresh_from_db(fields=["views"])
    return business


# ----------------------------- claims -----------------------------

@transaction.atomic
def request_claim(actor, business, message="") -> BusinessClaim:
    if not actor or not actor.is_authenticated:
        raise PermissionDenied("Authentication required.")
    if business.owner_id is not None:
        raise ConflictError("This business has already been claimed.")
    if BusinessClaim.objects.filter(
        business=business, user=actor, status=BusinessClaim.Status.PENDING
    ).exists():
        raise ConflictError("You already have a pending claim for this business.")

    claim = BusinessClaim.objects.create(business=business, user=actor, message=(message or "").strip())
    record_activity(
        Activity.Type.BUSINESS_CLAIM_REQUESTED,
        f'{display_name(actor)} requested ownership of "{business.name}"',
        user=actor,
        business=business,
        metadata={"businessId": business.id, "claimId": claim.id},
    )
    notify_admin(
        f"Claim request: {business.name}",
        f'{display_name(actor)} ({actor.email}) wants to claim "{business.name}".',
    )
    return claim


def _ensure_pending(claim):
    if claim.status != BusinessClaim.Status.PENDING:
        raise ConflictError(f"Claim is already {claim.status}.")


@transaction.atomic
def approve_claim(actor, claim) -> BusinessClaim:
    """Hand the listing to the claimant; competing pending claims are rejected."""
    _ensure_admin(actor)
    _ensure_pending(claim)
    business = claim.business
    if business.owner_id is not None:
        raise ConflictError("This business already has an owner.")

    now = timezone.now()
    business.owner = claim.user
    business.claimed_at = now
    business.save(update_fields=["owner", "claimed_at", "updated_at"])

    claim.status = BusinessClaim.Status.APPROVED
    claim.decided_by = actor
    claim.decided_at = now
    claim.save(update_fields=["status", "decided_by", "decided_at"])

    BusinessClaim.objects.filter(business=business, status=BusinessClaim.Status.PENDING).exclude(
        pk=claim.pk
    ).update(status=BusinessClaim.Status.REJECTED, decided_by=actor, decided_at=now)

    promote_to_business_owner(claim.user)
    record_activity(
        Activity.Type.BUSINESS_CLAIMED,
        f'"{business.name}" was claimed by {display_name(claim.user)}',
        user=actor,
        business=business,
        metadata={"businessId": business.id, "claimId": claim.id, "ownerId": claim.user_id},
    )
    notify(
        f"Your claim was approved - {business.name}",
        f'You are now the owner of "{business.name}" on CityLocal 101.\n\n'
        f"Manage your listing: {dashboard_url()}",
        claim.user.email,
    )
    return claim


@transaction.atomic
def reject_claim(actor, claim) -> BusinessClaim:
    _ensure_admin(actor)
    _ensure_pending(claim)
    claim.status = BusinessClaim.Status.REJECTED
    claim.decided_by = actor
    claim.decided_at = timezone.now()
    claim.save(update_fields=["status", "decided_by", "decided_at"])
    notify(
        f"Your claim was not approved - {claim.business.name}",
        f'We could not confirm your ownership of "{claim.business.name}". '
        f"Please contact support if you think this is a mistake.",
        claim.user.email,
    )
    return claim
