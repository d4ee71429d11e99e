from django.contrib.auth import get_user_model
from django.db.models import Avg
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework import status

from businesses.api.serializers import BusinessListSerializer
from businesses.api.views import BUSINESS_STATUS_FILTERS
from businesses.models import Business
from categories.models import Category
from common.permissions import IsAdminRole
from contacts.api.serializers import ContactTicketSerializer
from contacts.models import ContactTicket
from reviews.api.serializers import ReviewOutputSerializer
from reviews.models import Review
from user_auth_app.api.serializers import UserSerializer

User = get_user_model()

RECENT_LIMIT = 5


class BaseInfoAPIView(APIView):
    """
    GET /api/base-info/

    Returns platform-wide aggregate statistics:
    - business_count: number of active (approved) businesses
    - review_count: number of approved reviews
    - average_rating: average of approved ratings (rounded to 1 decimal)
    - category_count: number of active categories

    Authentication: none
    Permissions: AllowAny
    """

    authentication_classes = []          # No authentication required
    permission_classes = [AllowAny]      # Explicitly allow public access

    def get(self, request):
        """
        Compute and return the aggregate counters. If there are no approved
        reviews, average_rating is 0.0 (not null).
        """
        approved = Review.objects.filter(is_approved=True)
        avg = approved.aggregate(avg=Avg("rating"))["avg"] or 0.0

        data = {
            "business_count": Business.objects.filter(is_active=True).count(),
            "review_count": approved.count(),
            "average_rating": round(float(avg), 1),
            "category_count": Category.objects.filter(is_active=True).count(),
        }
        return Response(data, status=status.HTTP_200_OK)


class AdminStatsAPIView(APIView):
    """
    GET /api/admin/stats/

    Dashboard counters plus the five most recent users, businesses, reviews
    and contact tickets. Admins only.
    """

    permission_classes = [IsAuthenticated, IsAdminRole]

    def get(self, request):
        businesses = Business.objects.all()
        reviews = Review.objects.all()
        contacts = ContactTicket.objects.all()

        stats = {
            "total_users": User.objects.count(),
            "total_businesses": businesses.count(),
            "active_businesses": businesses.filter(BUSINESS_STATUS_FILTERS[Business.Status.ACTIVE]).count(),
            "pending_businesses": businesses.filter(BUSINESS_STATUS_FILTERS[Business.Status.PENDING]).count(),
            "rejected_businesses": businesses.filter(BUSINESS_STATUS_FILTERS[Business.Status.REJECTED]).count(),
            "total_reviews": reviews.count(),
            "pending_reviews": reviews.filter(is_approved=False).count(),
            "total_categories": Category.objects.count(),
            "total_contacts": contacts.count(),
            "unread_contacts": contacts.filter(is_read=False).count(),
        }

        recent_users = User.objects.select_related("profile").order_by("-date_joined", "-id")[:RECENT_LIMIT]
        recent_businesses = businesses.select_related("category").order_by("-created_at", "-id")[:RECENT_LIMIT]
        recent_reviews = reviews.select_related("business", "user__profile").order_by("-created_at", "-id")[:RECENT_LIMIT]
        recent_contacts = contacts.order_by("-created_at", "-id")[:RECENT_LIMIT]

        return Response(
            {
                "stats": stats,
                "recent_users": UserSerializer(recent_users, many=True).data,
                "recent_businesses": BusinessListSerializer(recent_businesses, many=True).data,
                "recent_reviews": ReviewOutputSerializer(recent_reviews, many=True).data,
                "recent_contacts": ContactTicketSerializer(recent_contacts, many=True).data,
            },
            status=status.HTTP_200_OK,
        )
