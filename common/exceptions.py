"""Project-wide error taxonomy and the REST framework exception handler.

DRF's built-in exceptions already cover validation (400), authentication (401),
authorization (403) and not-found (404). This module adds the conflict case
(409) and a handler that gives every error response a human-readable `error`
message. Unexpected exceptions are logged and answered with a generic 500.
"""

import logging

from django.conf import settings
from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class ConflictError(APIException):
    """Duplicate or state-conflicting write (e.g. second review, invalid transition)."""

    status_code = status.HTTP_409_CONFLICT
    default_detail = "The request conflicts with the current state of the resource."
    default_code = "conflict"


def _flatten_messages(detail) -> list[str]:
    """Collect all leaf messages of a DRF error structure, prefixed by field name."""
    if isinstance(detail, dict):
        messages = []
        for field, value in detail.items():
            for msg in _flatten_messages(value):
                if field in ("non_field_errors", "detail"):
                    messages.append(msg)
                else:
                    messages.append(f"{field}: {msg}")
        return messages
    if isinstance(detail, (list, tuple)):
        messages = []
        for value in detail:
            messages.extend(_flatten_messages(value))
        return messages
    return [str(detail)]


def directory_exception_handler(exc, context):
    """Shape error responses as {"error": <message>, ...}.

    - ValidationError: aggregated message plus field-level `errors`.
    - Other API exceptions: `error` next to DRF's usual `detail`.
    - Anything else: logged with traceback, 500 with a generic message; the
      exception text is exposed as `message` only in DEBUG mode.
    """
    response = exception_handler(exc, context)

    if response is None:
        view = context.get("view")
        logger.exception("Unhandled error in %s", type(view).__name__ if view else "view")
        data = {"error": "Server error"}
        if settings.DEBUG:
            data["message"] = str(exc)
        return Response(data, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    if isinstance(exc, ValidationError):
        messages = _flatten_messages(response.data)
        response.data = {
            "error": " ".join(messages) if messages else "Invalid input.",
            "errors": response.data,
        }
        return response

    if isinstance(response.data, dict) and "detail" in response.data:
        response.data["error"] = str(response.data["detail"])
    return response
