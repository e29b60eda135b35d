"""Serializers for message post CRUD with standard envelope support."""

from rest_framework import serializers

from .models import Message


class MessageSerializer(serializers.ModelSerializer):
    author = serializers.PrimaryKeyRelatedField(read_only=True)

    class Meta:
        """Expose the body as writable; author is bound by the view, never by the client."""
        model = Message
        fields = ["id", "body", "author", "created_at", "updated_at"]
        read_only_fields = ["id", "author", "created_at", "updated_at"]

    @staticmethod
    def validate_body(value):
        """Reject bodies that are only whitespace."""
        if not value.strip():
            raise serializers.ValidationError("Message body cannot be blank.")
        return value


__all__ = ["MessageSerializer"]
