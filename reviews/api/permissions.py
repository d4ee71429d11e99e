"""Reviews API permissions.

Contains object-level permissions for review endpoints.
"""

from rest_framework.permissions import BasePermission

from common.permissions import is_owner_or_admin


class IsReviewAuthor(BasePermission):
    """Allow edits only by the review author."""

    message = "Only the review author may modify this review."

    def has_object_permission(self, request, view, obj):
        user = request.user
        return bool(user and user.is_authenticated and obj.user_id == user.id)


class IsReviewAuthorOrAdmin(BasePermission):
    """Allow deletion by the author or an admin."""

    message = "Only the review author or an administrator may delete this review."

    def has_object_permission(self, request, view, obj):
        return is_owner_or_admin(request.user, obj.user_id)


class IsReviewedBusinessOwner(BasePermission):
    """Allow responses only by the owner of the reviewed business (or an admin)."""

    message = "Only the business owner may respond to this review."

    def has_object_permission(self, request, view, obj):
        return is_owner_or_admin(request.user, obj.business.owner_id)
