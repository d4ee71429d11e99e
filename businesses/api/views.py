"""Businesses API views.

Public listing and search (active listings only), detail with a view
counter, owner submission / editing / resubmission, ownership claims and the
admin moderation endpoints. State changes are delegated to
`businesses.services`; views only parse input and shape responses.
"""

from django.db.models import Q
from django.shortcuts import get_object_or_404
from rest_framework import generics, status
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from businesses import services
from businesses.models import Business, BusinessClaim
from businesses.search import apply_sort, build_business_queryset, location_suggestions, search_suggestions
from common.pagination import AdminPagination, DirectoryPagination
from common.permissions import IsAdminRole
from .permissions import IsBusinessOwner, IsBusinessOwnerOrAdmin, can_view_business
from .serializers import (
    AdminBusinessCreateSerializer,
    BusinessClaimSerializer,
    BusinessDetailSerializer,
    BusinessListSerializer,
    BusinessWriteSerializer,
    ClaimRequestSerializer,
    RejectBusinessSerializer,
)

BUSINESS_STATUS_FILTERS = {
    Business.Status.PENDING: Q(is_active=False, rejection_reason=""),
    Business.Status.REJECTED: Q(is_active=False) & ~Q(rejection_reason=""),
    Business.Status.ACTIVE: Q(is_active=True),
}


# ---- helpers (module-level) ----

def _reject_lifecycle_fields(data):
    """Generic edits must not touch moderation or derived fields."""
    if not isinstance(data, dict):
        raise ValidationError({"detail": "Expected a JSON object."})
    forbidden = sorted(services.LIFECYCLE_FIELDS.intersection(data.keys()))
    if forbidden:
        raise ValidationError({"detail": f"These fields cannot be changed here: {', '.join(forbidden)}."})


def _detail(business, request):
    return BusinessDetailSerializer(business, context={"request": request}).data


def _filter_by_status(qs, value):
    if not value:
        return qs
    if value not in BUSINESS_STATUS_FILTERS:
        raise ValidationError({"status": f"Allowed values: {', '.join(BUSINESS_STATUS_FILTERS)}."})
    return qs.filter(BUSINESS_STATUS_FILTERS[value])


# ----------------------------- public listing / search -----------------------------

class PublicBusinessListMixin:
    """Filtered, sorted and paginated active listings."""

    serializer_class = BusinessListSerializer
    pagination_class = DirectoryPagination
    results_key = "businesses"

    def get_queryset(self):
        params = self.request.query_params
        qs = build_business_queryset(params, public=True)
        return apply_sort(qs, params.get("sort"))


class BusinessListCreateAPIView(PublicBusinessListMixin, generics.ListCreateAPIView):
    """GET: public listing with filters. POST: submit a new listing for approval."""

    def get_permissions(self):
        if self.request.method == "POST":
            return [IsAuthenticated()]
        return [AllowAny()]

    def get_serializer_class(self):
        if self.request.method == "POST":
            return BusinessWriteSerializer
        return BusinessListSerializer

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        business = services.submit_business(request.user, serializer.validated_data)
        return Response(
            {
                "message": "Business submitted successfully. It will be visible once approved.",
                "business": _detail(business, request),
            },
            status=status.HTTP_201_CREATED,
        )


class BusinessSearchAPIView(PublicBusinessListMixin, generics.ListAPIView):
    """GET /api/search/ -> same filters and shape as the public listing."""

    permission_classes = [AllowAny]


class MyBusinessesAPIView(generics.ListAPIView):
    """GET: the caller's own listings in every moderation state."""

    serializer_class = BusinessDetailSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = DirectoryPagination
    results_key = "businesses"

    def get_queryset(self):
        qs = Business.objects.filter(owner=self.request.user).select_related("category", "owner")
        qs = _filter_by_status(qs, self.request.query_params.get("status"))
        return qs.order_by("-created_at", "-id")


class BusinessDetailAPIView(generics.RetrieveUpdateDestroyAPIView):
    """GET: listing detail (+1 view). PATCH/PUT: owner or admin. DELETE: owner or admin."""

    queryset = Business.objects.all().select_related("category", "owner")
    serializer_class = BusinessWriteSerializer

    def get_permissions(self):
        if self.request.method in ["PATCH", "PUT", "DELETE"]:
            return [IsAuthenticated(), IsBusinessOwnerOrAdmin()]
        return [AllowAny()]

    def retrieve(self, request, *args, **kwargs):
        business = self.get_object()
        if not can_view_business(request.user, business):
            raise NotFound("Business not found.")
        services.record_view(business)
        return Response({"business": _detail(business, request)}, status=status.HTTP_200_OK)

    def update(self, request, *args, **kwargs):
        """Always partial; lifecycle fields in the payload are a 400."""
        business = self.get_object()
        _reject_lifecycle_fields(request.data)
        serializer = self.get_serializer(business, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        business = services.update_business(request.user, business, serializer.validated_data)
        return Response(
            {"message": "Business updated successfully", "business": _detail(business, request)},
            status=status.HTTP_200_OK,
        )

    def destroy(self, request, *args, **kwargs):
        business = self.get_object()
        services.delete_business(request.user, business)
        return Response({"message": "Business deleted successfully"}, status=status.HTTP_200_OK)


class BusinessResubmitAPIView(generics.GenericAPIView):
    """POST: owner resubmits a rejected listing, optionally with corrections."""

    queryset = Business.objects.all().select_related("category", "owner")
    serializer_class = BusinessWriteSerializer
    permission_classes = [IsAuthenticated, IsBusinessOwner]

    def post(self, request, *args, **kwargs):
        business = self.get_object()
        _reject_lifecycle_fields(request.data)
        serializer = self.get_serializer(business, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        business = services.resubmit_business(request.user, business, serializer.validated_data)
        return Response(
            {"message": "Business resubmitted for approval", "business": _detail(business, request)},
            status=status.HTTP_200_OK,
        )


class BusinessWithdrawAPIView(generics.GenericAPIView):
    """POST: owner takes their listing off the directory, giving a reason."""

    queryset = Business.objects.all().select_related("category", "owner")
    serializer_class = RejectBusinessSerializer
    permission_classes = [IsAuthenticated, IsBusinessOwner]

    def post(self, request, *args, **kwargs):
        business = self.get_object()
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        business = services.reject_business(
            request.user, business, serializer.validated_data["rejection_reason"]
        )
        return Response(
            {"message": "Business withdrawn", "business": _detail(business, request)},
            status=status.HTTP_200_OK,
        )


class BusinessClaimAPIView(generics.GenericAPIView):
    """POST: request ownership of an unowned, active listing."""

    queryset = Business.objects.filter(is_active=True)
    serializer_class = ClaimRequestSerializer
    permission_classes = [IsAuthenticated]

    def post(self, request, *args, **kwargs):
        business = self.get_object()
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        claim = services.request_claim(request.user, business, serializer.validated_data["message"])
        return Response(
            {"message": "Claim submitted. An administrator will review it.", "claim": BusinessClaimSerializer(claim).data},
            status=status.HTTP_201_CREATED,
        )


class SearchSuggestionsAPIView(APIView):
    """GET ?q= -> up to 5 categories and 8 businesses (needs at least 2 characters)."""

    permission_classes = [AllowAny]

    def get(self, request):
        term = (request.query_params.get("q") or "").strip()
        if len(term) < 2:
            return Response({"categories": [], "businesses": []}, status=status.HTTP_200_OK)

        categories, businesses = search_suggestions(term)
        return Response(
            {
                "categories": [
                    {"id": c.id, "name": c.name, "slug": c.slug, "icon": c.icon} for c in categories
                ],
                "businesses": [
                    {
                        "id": b.id,
                        "name": b.name,
                        "slug": b.slug,
                        "city": b.city,
                        "state": b.state,
                        "category": b.category.name if b.category else None,
                    }
                    for b in businesses
                ],
            },
            status=status.HTTP_200_OK,
        )


class LocationSuggestionsAPIView(APIView):
    """GET ?q= -> up to 10 unique "City, State" labels."""

    permission_classes = [AllowAny]

    def get(self, request):
        term = (request.query_params.get("q") or "").strip()
        if len(term) < 2:
            return Response({"locations": []}, status=status.HTTP_200_OK)
        return Response({"locations": location_suggestions(term)}, status=status.HTTP_200_OK)


# ----------------------------------- admin -----------------------------------

class AdminBusinessListCreateAPIView(generics.ListCreateAPIView):
    """GET: every listing, filterable by status. POST: create a pre-approved listing."""

    permission_classes = [IsAuthenticated, IsAdminRole]
    pagination_class = AdminPagination
    results_key = "businesses"

    def get_serializer_class(self):
        if self.request.method == "POST":
            return AdminBusinessCreateSerializer
        return BusinessDetailSerializer

    def get_queryset(self):
        params = self.request.query_params
        qs = build_business_queryset(params, public=False)
        qs = _filter_by_status(qs, params.get("status"))
        if params.get("sort"):
            return apply_sort(qs, params.get("sort"))
        return qs.order_by("-created_at", "-id")

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        owner = data.pop("owner", None)
        business = services.create_approved_business(request.user, data, owner=owner)
        return Response(
            {"message": "Business created successfully", "business": _detail(business, request)},
            status=status.HTTP_201_CREATED,
        )


class _AdminBusinessActionAPIView(generics.GenericAPIView):
    queryset = Business.objects.all().select_related("category", "owner")
    permission_classes = [IsAuthenticated, IsAdminRole]


class AdminBusinessApproveAPIView(_AdminBusinessActionAPIView):
    def post(self, request, *args, **kwargs):
        business = services.approve_business(request.user, self.get_object())
        return Response(
            {"message": "Business approved successfully", "business": _detail(business, request)},
            status=status.HTTP_200_OK,
        )


class AdminBusinessRejectAPIView(_AdminBusinessActionAPIView):
    serializer_class = RejectBusinessSerializer

    def post(self, request, *args, **kwargs):
        business = self.get_object()
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        business = services.reject_business(
            request.user, business, serializer.validated_data["rejection_reason"]
        )
        return Response(
            {"message": "Business rejected", "business": _detail(business, request)},
            status=status.HTTP_200_OK,
        )


class AdminBusinessFeatureAPIView(_AdminBusinessActionAPIView):
    def post(self, request, *args, **kwargs):
        business = services.toggle_featured(request.user, self.get_object())
        verb = "featured" if business.is_featured else "unfeatured"
        return Response(
            {"message": f"Business {verb} successfully", "business": _detail(business, request)},
            status=status.HTTP_200_OK,
        )


class AdminClaimListAPIView(generics.ListAPIView):
    """GET: ownership claims, newest first, optional ?status=pending|approved|rejected."""

    serializer_class = BusinessClaimSerializer
    permission_classes = [IsAuthenticated, IsAdminRole]
    pagination_class = AdminPagination
    results_key = "claims"

    def get_queryset(self):
        qs = BusinessClaim.objects.all().select_related("business", "user")
        value = self.request.query_params.get("status")
        if value:
            if value not in BusinessClaim.Status.values:
                raise ValidationError({"status": f"Allowed values: {', '.join(BusinessClaim.Status.values)}."})
            qs = qs.filter(status=value)
        return qs


class _AdminClaimActionAPIView(APIView):
    permission_classes = [IsAuthenticated, IsAdminRole]

    def _claim(self, pk):
        return get_object_or_404(BusinessClaim.objects.select_related("business", "user"), pk=pk)


class AdminClaimApproveAPIView(_AdminClaimActionAPIView):
    def post(self, request, pk):
        claim = services.approve_claim(request.user, self._claim(pk))
        return Response(
            {"message": "Claim approved", "claim": BusinessClaimSerializer(claim).data},
            status=status.HTTP_200_OK,
        )


class AdminClaimRejectAPIView(_AdminClaimActionAPIView):
    def post(self, request, pk):
        claim = services.reject_claim(request.user, self._claim(pk))
        return Response(
            {"message": "Claim rejected", "claim": BusinessClaimSerializer(claim).data},
            status=status.HTTP_200_OK,
        )
