"""Activities API views.

Admin-only, paginated feed of the activity log, newest first, optionally
filtered by `type`.
"""

from rest_framework import generics
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated

from activities.models import Activity
from common.pagination import ActivityPagination
from common.permissions import IsAdminRole
from .serializers import ActivitySerializer


class AdminActivityListAPIView(generics.ListAPIView):
    """GET /api/admin/activities/ -> {activities, count, total, page, pages}."""

    serializer_class = ActivitySerializer
    permission_classes = [IsAuthenticated, IsAdminRole]
    pagination_class = ActivityPagination
    results_key = "activities"

    def get_queryset(self):
        qs = Activity.objects.select_related("user", "business", "review", "category")
        activity_type = self.request.query_params.get("type")
        if activity_type:
            allowed = {c[0] for c in Activity.Type.choices}
            if activity_type not in allowed:
                raise ValidationError({"type": "Unknown activity type."})
            qs = qs.filter(type=activity_type)
        return qs.order_by("-created_at", "-id")
