from django.urls import path
from .views import ChangePasswordView, LoginView, LogoutView, MeView, RegistrationView

urlpatterns = [
    path("auth/register/", RegistrationView.as_view(), name="registration"),
    path("auth/login/", LoginView.as_view(), name="login"),
    path("auth/logout/", LogoutView.as_view(), name="logout"),
    path("auth/me/", MeView.as_view(), name="me"),
    path("auth/change-password/", ChangePasswordView.as_view(), name="change-password"),
]
