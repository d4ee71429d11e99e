from django.urls import path
from .views import AdminActivityListAPIView

urlpatterns = [
    path("admin/activities/", AdminActivityListAPIView.as_view(), name="admin-activities"),
]
