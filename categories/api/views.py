"""Categories API views.

List categories with a live business count (one grouped aggregation per
request, never a stored counter) and retrieve a single category with a preview
of its active businesses. Create, update and delete are admin-only; deleting
a category leaves its businesses uncategorized.
"""

from django.db.models import Count
from rest_framework import generics, status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from activities.models import Activity
from activities.services import record_activity
from businesses.api.serializers import BusinessListSerializer
from businesses.models import Business
from categories.models import Category
from common.permissions import IsAdminRole
from .serializers import CategorySerializer


# ----------------------------- helpers (module-level) -----------------------------

def _flag(params, *names) -> bool:
    """True if any of the given query params equals 'true' (case-insensitive)."""
    return any((params.get(n) or "").lower() == "true" for n in names)


def business_counts(include_inactive: bool) -> dict:
    """Map category id -> number of businesses, aggregated from the businesses table."""
    qs = Business.objects.filter(category__isnull=False)
    if not include_inactive:
        qs = qs.filter(is_active=True)
    rows = qs.values("category_id").annotate(total=Count("id")).order_by()
    return {row["category_id"]: row["total"] for row in rows}


# --------------------------------------- views ---------------------------------------

class CategoryListCreateAPIView(generics.ListCreateAPIView):
    """GET: all categories with business counts (public). POST: create (admin)."""

    serializer_class = CategorySerializer

    def get_permissions(self):
        if self.request.method == "POST":
            return [IsAuthenticated(), IsAdminRole()]
        return [AllowAny()]

    def _include_inactive(self) -> bool:
        return _flag(self.request.query_params, "includeInactive", "include_inactive")

    def get_queryset(self):
        qs = Category.objects.all()
        if self.request.method == "GET" and not self._include_inactive():
            qs = qs.filter(is_active=True)
        return qs.order_by("order", "name")

    def list(self, request, *args, **kwargs):
        context = self.get_serializer_context()
        context["business_counts"] = business_counts(self._include_inactive())
        data = CategorySerializer(self.get_queryset(), many=True, context=context).data
        return Response({"categories": data, "count": len(data)}, status=status.HTTP_200_OK)

    def perform_create(self, serializer):
        category = serializer.save()
        record_activity(
            Activity.Type.CATEGORY_CREATED,
            f'Category "{category.name}" was created by admin',
            user=self.request.user,
            category=category,
            metadata={"categoryName": category.name, "categoryId": category.id},
        )


class CategoryDetailAPIView(generics.RetrieveUpdateDestroyAPIView):
    """GET: category + up to 10 active businesses. PATCH/PUT/DELETE: admin only."""

    queryset = Category.objects.all()
    serializer_class = CategorySerializer

    def get_permissions(self):
        if self.request.method in ["PATCH", "PUT", "DELETE"]:
            return [IsAuthenticated(), IsAdminRole()]
        return [AllowAny()]

    def retrieve(self, request, *args, **kwargs):
        category = self.get_object()
        businesses = (
            Business.objects.filter(category=category, is_active=True)
            .select_related("category", "owner")
            .order_by("-is_featured", "-rating_average", "-rating_count", "-created_at")[:10]
        )
        context = self.get_serializer_context()
        context["business_counts"] = business_counts(include_inactive=False)
        return Response(
            {
                "category": CategorySerializer(category, context=context).data,
                "businesses": BusinessListSerializer(businesses, many=True, context=context).data,
            },
            status=status.HTTP_200_OK,
        )

    def update(self, request, *args, **kwargs):
        """Partial update; responds with the category including its count."""
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        category = serializer.save()
        record_activity(
            Activity.Type.CATEGORY_UPDATED,
            f'Category "{category.name}" was updated by admin',
            user=request.user,
            category=category,
            metadata={"categoryName": category.name, "categoryId": category.id},
        )
        context = self.get_serializer_context()
        context["business_counts"] = business_counts(include_inactive=True)
        return Response(CategorySerializer(category, context=context).data, status=status.HTTP_200_OK)

    def destroy(self, request, *args, **kwargs):
        """Delete the category; its businesses become uncategorized (FK set to NULL)."""
        category = self.get_object()
        name = category.name
        affected = Business.objects.filter(category=category).count()
        category.delete()

        record_activity(
            Activity.Type.CATEGORY_DELETED,
            f'Category "{name}" was deleted by admin',
            user=request.user,
            metadata={"categoryName": name, "uncategorizedBusinesses": affected},
        )
        message = "Category deleted successfully"
        if affected:
            message += f" ({affected} businesses uncategorized)"
        return Response({"message": message, "uncategorized": affected}, status=status.HTTP_200_OK)
