"""Account maintenance: own-profile edits and admin user management."""

import logging

from django.db import transaction
from rest_framework.exceptions import PermissionDenied, ValidationError

from activities.models import Activity
from activities.services import record_activity
from common.permissions import is_admin
from reviews.services import refresh_business_rating
from .models import Profile, display_name

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ("phone", "avatar")


def _ensure_admin(actor):
    if not is_admin(actor):
        raise PermissionDenied("Only administrators may manage users.")


@transaction.atomic
def update_own_profile(actor, data) -> Profile:
    """Apply name / phone / avatar to the caller's account."""
    profile, _ = Profile.objects.get_or_create(user=actor)
    if "name" in data:
        actor.first_name = data["name"].strip()
        actor.save(update_fields=["first_name"])
    changed = [f for f in PROFILE_FIELDS if f in data]
    for field in changed:
        setattr(profile, field, data[field] or "")
    if changed:
        profile.save(update_fields=changed)

    record_activity(
        Activity.Type.USER_UPDATED,
        f'User "{display_name(actor)}" updated their profile',
        user=actor,
        metadata={"fields": sorted(data.keys())},
    )
    return profile


@transaction.atomic
def admin_update_user(actor, user, data):
    """Change role and/or active flag of `user`."""
    _ensure_admin(actor)
    demoting = "role" in data and data["role"] != Profile.Role.ADMIN
    if user.pk == actor.pk and (data.get("is_active") is False or demoting):
        raise ValidationError({"detail": "You cannot demote or deactivate your own account."})

    profile, _ = Profile.objects.get_or_create(user=user)
    if "role" in data:
        profile.role = data["role"]
        profile.save(update_fields=["role"])
    if "is_active" in data:
        user.is_active = data["is_active"]
        user.save(update_fields=["is_active"])

    record_activity(
        Activity.Type.USER_UPDATED,
        f'User "{display_name(user)}" updated by admin',
        user=actor,
        metadata={"userId": user.pk, "changes": {k: data[k] for k in ("role", "is_active") if k in data}},
    )
    logger.info("Admin %s updated user %s: %s", actor.pk, user.pk, sorted(data.keys()))
    return user


@transaction.atomic
def delete_user(actor, user) -> None:
    """Hard delete; their reviews go with them, so the affected ratings are refreshed."""
    _ensure_admin(actor)
    if user.pk == actor.pk:
        raise ValidationError({"detail": "You cannot delete your own account."})

    business_ids = list(user.reviews.values_list("business_id", flat=True).distinct())
    name, email, user_id = display_name(user), user.email, user.pk
    user.delete()

    for business_id in business_ids:
        refresh_business_rating(business_id)

    record_activity(
        Activity.Type.USER_DELETED,
        f'User "{name}" deleted',
        user=actor,
        metadata={"userId": user_id, "userEmail": email},
    )
    logger.info("Admin %s deleted user %s", actor.pk, user_id)
