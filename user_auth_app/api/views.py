"""Auth API views.

Token-based registration, login, logout, the current user and password
change. Login and registration also set the token as an http-only cookie so
browser clients can skip the Authorization header.
"""

import logging

from django.conf import settings
from django.contrib.auth import get_user_model
from django.contrib.auth.models import update_last_login
from django.middleware.csrf import get_token
from django.db import transaction
from rest_framework import status
from rest_framework.authtoken.models import Token
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from activities.models import Activity
from activities.services import record_activity
from profiles.models import Profile
from .serializers import ChangePasswordSerializer, LoginSerializer, RegistrationSerializer, UserSerializer

User = get_user_model()
logger = logging.getLogger(__name__)

COOKIE_MAX_AGE = 30 * 24 * 60 * 60


def _token_response(request, user, token, status_code, message=None):
    data = {"token": token.key, "user": UserSerializer(user).data}
    if message:
        data["message"] = message
    response = Response(data, status=status_code)
    response.set_cookie(
        settings.AUTH_COOKIE_NAME,
        token.key,
        max_age=COOKIE_MAX_AGE,
        httponly=True,
        samesite="Lax",
        secure=not settings.DEBUG,
    )
    # CSRF cookie for requests that authenticate through the token cookie
    get_token(request)
    return response


class RegistrationView(APIView):
    """POST /api/auth/register/ -> create user and profile, return auth token."""

    permission_classes = [AllowAny]

    def post(self, request, *args, **kwargs):
        serializer = RegistrationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        with transaction.atomic():
            user = serializer.save()
            Profile.objects.get_or_create(user=user, defaults={"role": Profile.Role.USER})
            token, _ = Token.objects.get_or_create(user=user)
            record_activity(
                Activity.Type.USER_REGISTERED,
                f'New user "{user.first_name}" registered',
                user=user,
                metadata={"userName": user.first_name, "userEmail": user.email},
            )
        logger.info("User %s registered", user.id)
        return _token_response(request, user, token, status.HTTP_201_CREATED, "Registration successful")


class LoginView(APIView):
    """POST /api/auth/login/ -> validate credentials and return auth token."""

    permission_classes = [AllowAny]

    def post(self, request, *args, **kwargs):
        serializer = LoginSerializer(data=request.data, context={"request": request})
        serializer.is_valid(raise_exception=True)

        user = serializer.validated_data["user"]
        token, _ = Token.objects.get_or_create(user=user)
        update_last_login(None, user)
        return _token_response(request, user, token, status.HTTP_200_OK)


class LogoutView(APIView):
    """POST /api/auth/logout/ -> invalidate the token and clear the cookie."""

    permission_classes = [IsAuthenticated]

    def post(self, request, *args, **kwargs):
        Token.objects.filter(user=request.user).delete()
        response = Response({"message": "Logged out successfully"}, status=status.HTTP_200_OK)
        response.delete_cookie(settings.AUTH_COOKIE_NAME, samesite="Lax")
        return response


class MeView(APIView):
    """GET /api/auth/me/ -> the authenticated user with role."""

    permission_classes = [IsAuthenticated]

    def get(self, request, *args, **kwargs):
        return Response({"user": UserSerializer(request.user).data}, status=status.HTTP_200_OK)


class ChangePasswordView(APIView):
    """POST /api/auth/change-password/ -> set a new password and rotate the token."""

    permission_classes = [IsAuthenticated]

    def post(self, request, *args, **kwargs):
        serializer = ChangePasswordSerializer(data=request.data, context={"request": request})
        serializer.is_valid(raise_exception=True)

        user = request.user
        with transaction.atomic():
            user.set_password(serializer.validated_data["new_password"])
            user.save(update_fields=["password"])
            Token.objects.filter(user=user).delete()
            token = Token.objects.create(user=user)
        return _token_response(request, user, token, status.HTTP_200_OK, "Password updated successfully")
