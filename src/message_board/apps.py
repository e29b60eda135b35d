"""App configuration for the message board."""

from django.apps import AppConfig


class MessageBoardConfig(AppConfig):
    """Message board app holds the message post resource."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "message_board"
