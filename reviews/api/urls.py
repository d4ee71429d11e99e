from django.urls import path
from .views import (
    AdminReviewApproveAPIView,
    AdminReviewDeleteAPIView,
    AdminReviewListAPIView,
    ReviewDetailAPIView,
    ReviewHelpfulAPIView,
    ReviewListCreateAPIView,
    ReviewReportAPIView,
    ReviewRespondAPIView,
)

urlpatterns = [
    path("reviews/", ReviewListCreateAPIView.as_view(), name="review-list"),
    path("reviews/<int:pk>/", ReviewDetailAPIView.as_view(), name="review-detail"),
    path("reviews/<int:pk>/helpful/", ReviewHelpfulAPIView.as_view(), name="review-helpful"),
    path("reviews/<int:pk>/respond/", ReviewRespondAPIView.as_view(), name="review-respond"),
    path("reviews/<int:pk>/report/", ReviewReportAPIView.as_view(), name="review-report"),
    path("admin/reviews/", AdminReviewListAPIView.as_view(), name="admin-reviews"),
    path("admin/reviews/<int:pk>/approve/", AdminReviewApproveAPIView.as_view(), name="admin-review-approve"),
    path("admin/reviews/<int:pk>/", AdminReviewDeleteAPIView.as_view(), name="admin-review-delete"),
]
