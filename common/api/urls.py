from django.urls import path
from .views import AdminStatsAPIView, BaseInfoAPIView

urlpatterns = [
    path("base-info/", BaseInfoAPIView.as_view(), name="base-info"),
    path("admin/stats/", AdminStatsAPIView.as_view(), name="admin-stats"),
]
