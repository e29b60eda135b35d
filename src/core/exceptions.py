"""Custom exception handling to enforce the API error envelope."""

import logging
from typing import Any

from django.conf import settings
from django.db import DatabaseError
from rest_framework import status
from rest_framework.exceptions import AuthenticationFailed, NotAuthenticated
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from access_control.exceptions import AuthorizationDenied, OwnershipViolation
from authentication.services import BlocklistUnavailable

logger = logging.getLogger(__name__)

GENERIC_AUTH_ERROR = "Authentication credentials were not provided or are invalid, or the token was revoked."


def _normalize_errors(payload: Any) -> list[Any]:
    """Convert DRF's response.data into a list for the envelope."""

    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict) and "detail" in payload:
        # Common DRF pattern: {"detail": "..."}
        return [payload["detail"]]
    return [payload]


def custom_exception_handler(exc: Exception, context: dict[str, Any]):
    """Map exceptions onto responses; wrap DRF errors in `{ "data": null, "errors": [...] }`.

    - ``AuthorizationDenied`` becomes the login redirect, never an error page.
    - ``OwnershipViolation`` means the gate/binding order was broken; it is
      logged and re-raised as a server error.
    - Everything else goes through DRF's default handler and the envelope.
    """

    if isinstance(exc, AuthorizationDenied):
        return exc.as_response()

    if isinstance(exc, OwnershipViolation):
        view = context.get("view")
        logger.error("Ownership invariant violated in %s: %s", type(view).__name__, exc)
        return None

    # Blocklist outages are security-critical and fail closed.
    if isinstance(exc, BlocklistUnavailable):
        return Response(
            {"data": None, "errors": ["Authentication service unavailable (blocklist)."]},
            status=status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    if isinstance(exc, DatabaseError):
        logger.warning("Database error handled as 503: %s", exc)
        return Response(
            {"data": None, "errors": ["Service temporarily unavailable."]},
            status=status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    response = drf_exception_handler(exc, context)
    if response is None:
        return response

    if isinstance(exc, (AuthenticationFailed, NotAuthenticated)):
        response.status_code = status.HTTP_401_UNAUTHORIZED

    if response.status_code >= 400:
        if response.status_code == status.HTTP_401_UNAUTHORIZED and not getattr(settings, "DEBUG_AUTH_ERRORS", False):
            errors = [GENERIC_AUTH_ERROR]
        else:
            errors = _normalize_errors(response.data)
        response.data = {"data": None, "errors": errors}

    return response
