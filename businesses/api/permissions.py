"""Businesses API permissions.

Object-level checks used by business endpoints. The service layer repeats
them for callers that do not go through a view.
"""

from rest_framework.permissions import SAFE_METHODS, BasePermission

from common.permissions import is_owner_or_admin


class IsBusinessOwnerOrAdmin(BasePermission):
    """Allow modifications only for the listing owner or an admin."""

    message = "Only the business owner or an administrator can modify this business."

    def has_object_permission(self, request, view, obj):
        if request.method in SAFE_METHODS:
            return True
        return is_owner_or_admin(request.user, obj.owner_id)


class IsBusinessOwner(BasePermission):
    """Owner-only actions such as resubmitting a rejected listing."""

    message = "Only the business owner can perform this action."

    def has_object_permission(self, request, view, obj):
        return request.user.is_authenticated and obj.owner_id == request.user.id


def can_view_business(user, business) -> bool:
    """Active listings are public; inactive ones only for their owner or an admin."""
    if business.is_active:
        return True
    return is_owner_or_admin(user, business.owner_id)
