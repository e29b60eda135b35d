"""App configuration for the identity provider."""

from django.apps import AppConfig


class AuthenticationConfig(AppConfig):
    """Holds the custom User model, token service, and login endpoints."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "authentication"
