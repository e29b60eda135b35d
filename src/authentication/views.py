"""Identity provider endpoints: login, refresh, logout, and profile."""

from typing import Any

from django.contrib.auth import get_user_model
from django.utils.http import url_has_allowed_host_and_scheme
from rest_framework import status
from rest_framework.exceptions import AuthenticationFailed
from rest_framework.response import Response
from rest_framework.views import APIView

from access_control.gate import access_gate, public
from core.response import BaseAPIView, api_response
from .serializers import LoginSerializer, UserDetailSerializer
from .services import TokenService

User = get_user_model()


class LoginView(BaseAPIView):
    """Target of every access gate redirect."""

    permission_classes: list[Any] = []

    # noinspection PyMethodMayBeStatic
    @public
    def get(self, request):
        """Describe how to log in and echo the path the gate redirected from."""
        next_path = request.query_params.get("next", "")
        if not url_has_allowed_host_and_scheme(next_path, allowed_hosts={request.get_host()}):
            next_path = ""
        return api_response({"fields": ["email", "password"], "next": next_path})

    # noinspection PyMethodMayBeStatic
    @public
    def post(self, request):
        """Authenticate and issue access + refresh tokens."""
        serializer = LoginSerializer(data=request.data, context={"request": request})
        serializer.is_valid(raise_exception=True)
        access, refresh = TokenService.generate_tokens(serializer.validated_data["user"])
        data = {"access": access, "refresh": refresh}
        if serializer.validated_data.get("next"):
            data["next"] = serializer.validated_data["next"]
        return api_response(data)


class RefreshView(BaseAPIView):
    permission_classes: list[Any] = []

    # noinspection PyMethodMayBeStatic
    @public
    def post(self, request):
        """Exchange a valid refresh token for a new token pair."""
        refresh_token = request.data.get("refresh")
        if not refresh_token:
            raise AuthenticationFailed("Refresh token required")

        payload = TokenService.decode_token(refresh_token, expected_type="refresh")
        if TokenService.is_token_blocked(payload.get("jti", "")):
            raise AuthenticationFailed("Invalid or revoked refresh token")

        user = _get_active_user(payload.get("sub"))
        if not user:
            raise AuthenticationFailed("User not found or inactive")

        # Refresh tokens are single use.
        TokenService.block_token(payload["jti"], payload["exp"])
        access, new_refresh = TokenService.generate_tokens(user)
        return api_response({"access": access, "refresh": new_refresh})


class LogoutView(APIView):
    """Invalidate the current access token by blocklisting its jti."""

    # noinspection PyMethodMayBeStatic
    @public
    def post(self, request):
        """Blocklist the bearer access token and return 204 No Content."""
        token = _get_bearer_token(request)
        if not token:
            raise AuthenticationFailed("Missing token.")

        payload = TokenService.decode_token(token, expected_type="access")
        TokenService.block_token(payload["jti"], payload["exp"])
        # 204 responses must not include a body.
        return Response(status=status.HTTP_204_NO_CONTENT)


class MeView(BaseAPIView):
    permission_classes: list[Any] = []

    # noinspection PyMethodMayBeStatic
    @access_gate("profile")
    def get(self, request):
        """Return the current member's profile."""
        return api_response(UserDetailSerializer(request.user).data)


def _get_active_user(user_id) -> User | None:
    """Retrieve an active user by id, or None if missing/inactive."""
    if not user_id:
        return None
    try:
        user = User.objects.get(id=user_id)
    except (User.DoesNotExist, ValueError):
        return None
    if not user.is_active:
        return None
    return user


def _get_bearer_token(request) -> str | None:
    """Extract the Bearer token from Authorization header if present."""
    auth_header = request.META.get("HTTP_AUTHORIZATION", "")
    if auth_header.startswith("Bearer "):
        return auth_header.split(" ", 1)[1]
    return None
