"""Serializers for the login flow and the member profile."""

from django.contrib.auth import get_user_model
from django.utils.http import url_has_allowed_host_and_scheme
from rest_framework import serializers
from rest_framework.exceptions import AuthenticationFailed

from .managers import UserManager

User = get_user_model()


class LoginSerializer(serializers.Serializer):
    """Authenticate a member via email/password using bcrypt verification.

    ``next`` is the path the access gate redirected from; it is echoed back
    only when it points at this site.
    """

    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)
    next = serializers.CharField(required=False, allow_blank=True)

    def validate_next(self, value):
        request = self.context.get("request")
        allowed_hosts = {request.get_host()} if request is not None else set()
        if value and url_has_allowed_host_and_scheme(value, allowed_hosts=allowed_hosts):
            return value
        return ""

    def validate(self, attrs):
        """Authenticate credentials and attach the user to validated_data."""
        try:
            user = User.objects.get(email=attrs.get("email"))
        except User.DoesNotExist:
            raise AuthenticationFailed("Invalid credentials")

        if not user.is_active:
            raise AuthenticationFailed("User is inactive")

        if not UserManager.verify_password(user, attrs.get("password")):
            raise AuthenticationFailed("Invalid credentials")

        attrs["user"] = user
        return attrs


class UserDetailSerializer(serializers.ModelSerializer):
    """Read-only member profile payload for responses."""

    class Meta:
        model = User
        fields = ["id", "email", "first_name", "last_name"]
        read_only_fields = fields


__all__ = ["LoginSerializer", "UserDetailSerializer"]
