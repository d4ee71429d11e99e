"""Role helpers and permissions shared across apps.

Roles live on `profiles.Profile.role` (user / business_owner / admin). Django
staff users are treated as admins as well.
"""

from rest_framework.permissions import BasePermission

ROLE_USER = "user"
ROLE_BUSINESS_OWNER = "business_owner"
ROLE_ADMIN = "admin"


def user_role(user) -> str:
    """Return the directory role of `user` ("" for anonymous users)."""
    if not user or not user.is_authenticated:
        return ""
    profile = getattr(user, "profile", None)
    return getattr(profile, "role", "") or ROLE_USER


def is_admin(user) -> bool:
    if not user or not user.is_authenticated:
        return False
    return bool(user.is_staff) or user_role(user) == ROLE_ADMIN


def is_owner_or_admin(user, owner_id) -> bool:
    if not user or not user.is_authenticated:
        return False
    return owner_id == user.id or is_admin(user)


class IsAdminRole(BasePermission):
    """Allow access only to authenticated admins (role 'admin' or staff)."""

    message = "Only administrators may access this endpoint."

    def has_permission(self, request, view):
        return is_admin(request.user)
