"""Middleware resolving the request identity from a bearer JWT."""

import logging
from typing import Optional

from django.contrib.auth.models import AnonymousUser
from django.http import JsonResponse
from django.utils.deprecation import MiddlewareMixin
from rest_framework import status
from rest_framework.exceptions import AuthenticationFailed

from authentication.models import User
from authentication.services import TokenService, BlocklistUnavailable

logger = logging.getLogger(__name__)


class JWTAuthMiddleware(MiddlewareMixin):
    """Decode the access JWT, check the blocklist, and attach request.user.

    A missing, invalid, expired, or revoked token leaves the request
    anonymous so the access gate sends it to the login page instead of an
    error response. Only a blocklist outage fails the request outright.
    """

    def process_request(self, request):  # type: ignore[override]
        request.user = AnonymousUser()

        auth_header = request.META.get("HTTP_AUTHORIZATION", "")
        if not auth_header.startswith("Bearer "):
            return None

        token = auth_header.split(" ", 1)[1]
        try:
            payload = TokenService.decode_token(token, expected_type="access")
            jti = payload.get("jti")
            if not jti or TokenService.is_token_blocked(jti):
                logger.info("Ignoring revoked or malformed access token on %s", request.path)
                return None
        except AuthenticationFailed as exc:
            logger.info("Ignoring bearer token on %s: %s", request.path, exc.detail)
            return None
        except BlocklistUnavailable:
            return _service_unavailable()

        user = self._get_user(payload.get("sub"))
        if user is not None and user.is_active:
            request.user = user
        return None

    @staticmethod
    def _get_user(user_id: Optional[str]) -> Optional[User]:
        if not user_id:
            return None
        try:
            return User.objects.get(id=user_id)
        except (User.DoesNotExist, ValueError):
            return None


def _service_unavailable() -> JsonResponse:
    return JsonResponse(
        {"data": None, "errors": ["Authentication service unavailable (blocklist)."]},
        status=status.HTTP_503_SERVICE_UNAVAILABLE,
    )


__all__ = ["JWTAuthMiddleware"]
