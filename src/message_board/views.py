"""Message post ViewSet with every CRUD operation behind the access gate."""

from rest_framework import viewsets

from access_control.gate import gate_operations
from access_control.ownership import bind_author
from access_control.policy import Operation
from core.response import BaseViewSet
from .models import Message
from .serializers import MessageSerializer

PROTECTED_OPERATIONS = (
    Operation.LIST,
    Operation.CREATE,
    Operation.READ,
    Operation.UPDATE,
    Operation.DELETE,
)


@gate_operations(*PROTECTED_OPERATIONS)
class MessageViewSet(BaseViewSet, viewsets.ModelViewSet):
    serializer_class = MessageSerializer
    queryset = Message.objects.select_related("author")

    def perform_create(self, serializer):
        """Attach the current user as author on create."""
        bind_author(serializer, self.request)


__all__ = ["MessageViewSet", "PROTECTED_OPERATIONS"]
