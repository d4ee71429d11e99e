"""Profiles app models.

Defines the Profile model that extends the base user with the directory role
(user / business_owner / admin) and contact metadata. String fields default to
empty strings to avoid nulls in API responses.
"""

from django.conf import settings
from django.db import models


class Profile(models.Model):
    """
    Profile for a single user.

    The role decides what a user may do: regular users browse and review,
    business owners manage their listings, admins moderate everything.
    A profile is created at most once per user (OneToOne relationship).
    """

    class Role(models.TextChoices):
        USER = "user", "user"
        BUSINESS_OWNER = "business_owner", "business_owner"
        ADMIN = "admin", "admin"

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="profile",
    )
    role = models.CharField(max_length=20, choices=Role.choices, default=Role.USER)
    phone = models.CharField(max_length=20, blank=True, default="")
    avatar = models.CharField(max_length=255, blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        """Readable representation for admin and debugging."""
        return f"Profile<{self.user_id}:{self.role}>"


def display_name(user) -> str:
    """Name shown in feeds and e-mails; falls back to the username."""
    if user is None:
        return ""
    return user.first_name or user.username


def promote_to_business_owner(user) -> None:
    """Give `user` the business_owner role unless they are already an admin."""
    profile, _ = Profile.objects.get_or_create(user=user)
    if profile.role == Profile.Role.USER:
        profile.role = Profile.Role.BUSINESS_OWNER
        profile.save(update_fields=["role"])
