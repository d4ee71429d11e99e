"""Reviews API views.

Public listing of approved reviews (filterable by business), review creation
(pending until an admin approves it), author edits and deletes, helpful
votes, owner responses and reports. Admin endpoints list reviews by
moderation state, approve and delete them.
"""

from django.db.models import Count, Q
from rest_framework import generics, status
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from common.pagination import AdminPagination, DirectoryPagination
from common.permissions import IsAdminRole, is_owner_or_admin
from reviews import services
from reviews.models import Review
from .permissions import IsReviewAuthor, IsReviewAuthorOrAdmin, IsReviewedBusinessOwner
from .serializers import (
    ReviewCreateSerializer,
    ReviewOutputSerializer,
    ReviewPatchSerializer,
    ReviewResponseSerializer,
)

REVIEW_SORTS = {
    "newest": ("-created_at", "-id"),
    "oldest": ("created_at", "id"),
    "highest": ("-rating", "-created_at"),
    "lowest": ("rating", "-created_at"),
    "helpful": ("-_helpful_count", "-created_at"),
}

REVIEW_STATUS_FILTERS = {
    "pending": Q(is_approved=False),
    "approved": Q(is_approved=True),
    "reported": Q(is_reported=True),
}


# ----------------------------- helpers (module-level) -----------------------------

def _base_queryset():
    return Review.objects.select_related("business", "user", "user__profile").annotate(
        _helpful_count=Count("helpful_by", distinct=True)
    )


def _apply_filters_and_ordering(qs, params):
    """Filter by business / user id and apply a named sort; raises ValidationError on bad input."""
    for param, field in (("business", "business_id"), ("business_id", "business_id"), ("user", "user_id")):
        v = params.get(param)
        if v:
            if not v.isdigit():
                raise ValidationError({param: "Must be an integer."})
            qs = qs.filter(**{field: int(v)})

    sort = params.get("sort") or "newest"
    if sort not in REVIEW_SORTS:
        raise ValidationError({"sort": f"Allowed values: {', '.join(REVIEW_SORTS)}."})
    return qs.order_by(*REVIEW_SORTS[sort])


def _validate_patch_fields(data):
    """Allow only rating/title/comment/images."""
    if not isinstance(data, dict):
        raise ValidationError({"detail": "Expected a JSON object."})
    allowed = {"rating", "title", "comment", "images"}
    extra = set(data.keys()) - allowed
    if extra:
        raise ValidationError(
            {"detail": f"Only {', '.join(sorted(allowed))} may be updated. Invalid: {', '.join(sorted(extra))}."}
        )


def _output(review):
    return ReviewOutputSerializer(review).data


# --------------------------------------- views ---------------------------------------

class ReviewListCreateAPIView(generics.ListCreateAPIView):
    """GET: approved reviews (public). POST: submit a review (authenticated)."""

    pagination_class = DirectoryPagination
    results_key = "reviews"

    def get_permissions(self):
        if self.request.method == "POST":
            return [IsAuthenticated()]
        return [AllowAny()]

    def get_serializer_class(self):
        return ReviewOutputSerializer if self.request.method == "GET" else ReviewCreateSerializer

    def get_queryset(self):
        qs = _base_queryset().filter(is_approved=True, business__is_active=True)
        return _apply_filters_and_ordering(qs, self.request.query_params)

    def create(self, request, *args, **kwargs):
        ser = self.get_serializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = dict(ser.validated_data)
        business = data.pop("business")
        review = services.create_review(request.user, business, data)
        return Response(
            {
                "message": "Review submitted successfully. It will be visible after approval.",
                "review": _output(review),
            },
            status=status.HTTP_201_CREATED,
        )


class ReviewDetailAPIView(generics.RetrieveUpdateDestroyAPIView):
    """GET: one review. PATCH/PUT: author only. DELETE: author or admin."""

    serializer_class = ReviewPatchSerializer

    def get_queryset(self):
        return _base_queryset()

    def get_permissions(self):
        if self.request.method in ["PATCH", "PUT"]:
            return [IsAuthenticated(), IsReviewAuthor()]
        if self.request.method == "DELETE":
            return [IsAuthenticated(), IsReviewAuthorOrAdmin()]
        return [AllowAny()]

    def retrieve(self, request, *args, **kwargs):
        review = self.get_object()
        if not review.is_approved and not is_owner_or_admin(request.user, review.user_id):
            raise NotFound("Review not found.")
        return Response(_output(review), status=status.HTTP_200_OK)

    def update(self, request, *args, **kwargs):
        """Always partial; the aggregate rating is recomputed."""
        _validate_patch_fields(request.data)
        review = self.get_object()
        ser = self.get_serializer(review, data=request.data, partial=True)
        ser.is_valid(raise_exception=True)
        review = services.update_review(request.user, review, ser.validated_data)
        return Response(
            {"message": "Review updated successfully", "review": _output(review)},
            status=status.HTTP_200_OK,
        )

    def destroy(self, request, *args, **kwargs):
        services.delete_review(request.user, self.get_object())
        return Response({"message": "Review deleted successfully"}, status=status.HTTP_200_OK)


class _ApprovedReviewActionAPIView(generics.GenericAPIView):
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        return Review.objects.filter(is_approved=True).select_related("business", "user")


class ReviewHelpfulAPIView(_ApprovedReviewActionAPIView):
    """POST: toggle the caller's helpful vote."""

    def post(self, request, *args, **kwargs):
        count, marked = services.toggle_helpful(request.user, self.get_object())
        return Response({"helpful_count": count, "marked": marked}, status=status.HTTP_200_OK)


class ReviewRespondAPIView(_ApprovedReviewActionAPIView):
    """POST: the business owner answers the review."""

    serializer_class = ReviewResponseSerializer
    permission_classes = [IsAuthenticated, IsReviewedBusinessOwner]

    def post(self, request, *args, **kwargs):
        review = self.get_object()
        ser = self.get_serializer(data=request.data)
        ser.is_valid(raise_exception=True)
        review = services.respond_to_review(request.user, review, ser.validated_data["comment"])
        return Response(
            {"message": "Response added successfully", "review": _output(review)},
            status=status.HTTP_200_OK,
        )


class ReviewReportAPIView(_ApprovedReviewActionAPIView):
    """POST: flag the review for admin attention."""

    def post(self, request, *args, **kwargs):
        services.report_review(request.user, self.get_object())
        return Response({"message": "Review reported. Thank you."}, status=status.HTTP_200_OK)


# ----------------------------------- admin -----------------------------------

class AdminReviewListAPIView(generics.ListAPIView):
    """GET: all reviews, optionally ?status=pending|approved|reported."""

    serializer_class = ReviewOutputSerializer
    permission_classes = [IsAuthenticated, IsAdminRole]
    pagination_class = AdminPagination
    results_key = "reviews"

    def get_queryset(self):
        params = self.request.query_params
        qs = _base_queryset()
        value = params.get("status")
        if value:
            if value not in REVIEW_STATUS_FILTERS:
                raise ValidationError({"status": f"Allowed values: {', '.join(REVIEW_STATUS_FILTERS)}."})
            qs = qs.filter(REVIEW_STATUS_FILTERS[value])
        return _apply_filters_and_ordering(qs, params)


class AdminReviewApproveAPIView(generics.GenericAPIView):
    permission_classes = [IsAuthenticated, IsAdminRole]

    def get_queryset(self):
        return Review.objects.select_related("business", "user")

    def post(self, request, *args, **kwargs):
        review = services.approve_review(request.user, self.get_object())
        return Response(
            {"message": "Review approved successfully", "review": _output(review)},
            status=status.HTTP_200_OK,
        )


class AdminReviewDeleteAPIView(generics.DestroyAPIView):
    permission_classes = [IsAuthenticated, IsAdminRole]

    def get_queryset(self):
        return Review.objects.select_related("business", "user")

    def destroy(self, request, *args, **kwargs):
        services.delete_review(request.user, self.get_object())
        return Response({"message": "Review deleted successfully"}, status=status.HTTP_200_OK)
