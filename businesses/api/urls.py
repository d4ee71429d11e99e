from django.urls import path
from .views import (
    AdminBusinessApproveAPIView,
    AdminBusinessFeatureAPIView,
    AdminBusinessListCreateAPIView,
    AdminBusinessRejectAPIView,
    AdminClaimApproveAPIView,
    AdminClaimListAPIView,
    AdminClaimRejectAPIView,
    BusinessClaimAPIView,
    BusinessDetailAPIView,
    BusinessListCreateAPIView,
    BusinessResubmitAPIView,
    BusinessSearchAPIView,
    BusinessWithdrawAPIView,
    LocationSuggestionsAPIView,
    MyBusinessesAPIView,
    SearchSuggestionsAPIView,
)

urlpatterns = [
    path("businesses/", BusinessListCreateAPIView.as_view(), name="business-list"),
    path("businesses/mine/", MyBusinessesAPIView.as_view(), name="business-mine"),
    path("businesses/<int:pk>/", BusinessDetailAPIView.as_view(), name="business-detail"),
    path("businesses/<int:pk>/resubmit/", BusinessResubmitAPIView.as_view(), name="business-resubmit"),
    path("businesses/<int:pk>/withdraw/", BusinessWithdrawAPIView.as_view(), name="business-withdraw"),
    path("businesses/<int:pk>/claim/", BusinessClaimAPIView.as_view(), name="business-claim"),
    path("search/", BusinessSearchAPIView.as_view(), name="search"),
    path("search/suggestions/", SearchSuggestionsAPIView.as_view(), name="search-suggestions"),
    path("search/location-suggestions/", LocationSuggestionsAPIView.as_view(), name="location-suggestions"),
    path("admin/businesses/", AdminBusinessListCreateAPIView.as_view(), name="admin-businesses"),
    path("admin/businesses/<int:pk>/approve/", AdminBusinessApproveAPIView.as_view(), name="admin-business-approve"),
    path("admin/businesses/<int:pk>/reject/", AdminBusinessRejectAPIView.as_view(), name="admin-business-reject"),
    path("admin/businesses/<int:pk>/feature/", AdminBusinessFeatureAPIView.as_view(), name="admin-business-feature"),
    path("admin/claims/", AdminClaimListAPIView.as_view(), name="admin-claims"),
    path("admin/claims/<int:pk>/approve/", AdminClaimApproveAPIView.as_view(), name="admin-claim-approve"),
    path("admin/claims/<int:pk>/reject/", AdminClaimRejectAPIView.as_view(), name="admin-claim-reject"),
]
