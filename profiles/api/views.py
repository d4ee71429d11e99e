"""Profiles API views.

Provides the caller's own profile (read and partial update) and the admin
user management endpoints (list, change role / active flag, delete).
"""

from django.contrib.auth import get_user_model
from django.db.models import Count, Q
from rest_framework import generics, status
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from common.pagination import AdminPagination
from common.permissions import IsAdminRole
from user_auth_app.api.serializers import UserSerializer
from ..models import Profile
from .. import services
from .serializers import AdminUserPatchSerializer, AdminUserSerializer, ProfilePatchSerializer

User = get_user_model()


def _fresh_user(pk):
    return User.objects.select_related("profile").get(pk=pk)


class ProfileView(generics.GenericAPIView):
    """
    API endpoint for the authenticated user's own profile.

    - GET `/api/profile/` returns the current user (same shape as `/auth/me/`).
    - PATCH `/api/profile/` updates only the fields provided
      (`name`, `phone`, `avatar`).
    """

    permission_classes = [IsAuthenticated]
    serializer_class = ProfilePatchSerializer

    def get(self, request, *args, **kwargs):
        return Response({"user": UserSerializer(_fresh_user(request.user.pk)).data}, status=status.HTTP_200_OK)

    def patch(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        services.update_own_profile(request.user, serializer.validated_data)
        return Response(
            {"message": "Profile updated successfully", "user": UserSerializer(_fresh_user(request.user.pk)).data},
            status=status.HTTP_200_OK,
        )


class AdminUserListAPIView(generics.ListAPIView):
    """
    GET `/api/admin/users/` lists all accounts, newest first.

    Optional filters: `?role=user|business_owner|admin`, `?search=` (name or
    e-mail), `?is_active=true|false`.
    """

    serializer_class = AdminUserSerializer
    permission_classes = [IsAuthenticated, IsAdminRole]
    pagination_class = AdminPagination
    results_key = "users"

    def get_queryset(self):
        qs = (
            User.objects.select_related("profile")
            .annotate(
                business_count=Count("businesses", distinct=True),
                review_count=Count("reviews", distinct=True),
            )
            .order_by("-date_joined", "-id")
        )
        params = self.request.query_params

        role = params.get("role")
        if role:
            if role not in Profile.Role.values:
                raise ValidationError({"role": f"Allowed values: {', '.join(Profile.Role.values)}."})
            # accounts without profile count as plain users
            role_q = Q(profile__role=role)
            if role == Profile.Role.USER:
                role_q |= Q(profile__isnull=True)
            qs = qs.filter(role_q)

        search = (params.get("search") or "").strip()
        if search:
            qs = qs.filter(Q(first_name__icontains=search) | Q(email__icontains=search))

        active = params.get("is_active")
        if active in ("true", "false"):
            qs = qs.filter(is_active=active == "true")
        return qs


class AdminUserDetailAPIView(generics.GenericAPIView):
    """PATCH `/api/admin/users/<id>/` (role / is_active) and DELETE (hard delete)."""

    permission_classes = [IsAuthenticated, IsAdminRole]
    serializer_class = AdminUserPatchSerializer
    queryset = User.objects.all()

    def patch(self, request, *args, **kwargs):
        user = self.get_object()
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        services.admin_update_user(request.user, user, serializer.validated_data)
        return Response(
            {"message": "User updated successfully", "user": UserSerializer(_fresh_user(user.pk)).data},
            status=status.HTTP_200_OK,
        )

    def delete(self, request, *args, **kwargs):
        services.delete_user(request.user, self.get_object())
        return Response({"message": "User deleted successfully"}, status=status.HTTP_200_OK)
