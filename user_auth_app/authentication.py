"""Token authentication for the directory API.

Clients send `Authorization: Bearer <token>`; browsers may instead rely on the
http-only `token` cookie set at login. Both resolve the same DRF tokens.
Cookie-authenticated unsafe requests must pass Django's CSRF check, like
DRF's SessionAuthentication.
"""

from django.conf import settings
from rest_framework import exceptions
from rest_framework.authentication import CSRFCheck, TokenAuthentication


class BearerTokenAuthentication(TokenAuthentication):
    """`Authorization: Bearer <key>` header."""

    keyword = "Bearer"


class CookieTokenAuthentication(TokenAuthentication):
    """Token taken from the auth cookie when no Authorization header is sent."""

    def authenticate(self, request):
        key = request.COOKIES.get(settings.AUTH_COOKIE_NAME)
        if not key:
            return None
        user, token = self.authenticate_credentials(key)
        self.enforce_csrf(request)
        return user, token

    def enforce_csrf(self, request):
        """Reject unsafe methods without a valid CSRF token (safe methods pass)."""
        def dummy_get_response(request):
            return None

        check = CSRFCheck(dummy_get_response)
        check.process_request(request)
        reason = check.process_view(request, None, (), {})
        if reason:
            raise exceptions.PermissionDenied(f"CSRF Failed: {reason}")
