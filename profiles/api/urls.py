from django.urls import path
from .views import ProfileView, AdminUserListAPIView, AdminUserDetailAPIView

urlpatterns = [
    path("profile/", ProfileView.as_view(), name="profile"),
    path("admin/users/", AdminUserListAPIView.as_view(), name="admin-users"),
    path("admin/users/<int:pk>/", AdminUserDetailAPIView.as_view(), name="admin-user-detail"),
]
