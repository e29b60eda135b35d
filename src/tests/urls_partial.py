"""URLconf with one message viewset per operation, each missing that operation's gate."""

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from access_control.gate import gate_operations
from access_control.ownership import bind_author
from core.response import BaseViewSet
from message_board.models import Message
from message_board.serializers import MessageSerializer
from message_board.views import PROTECTED_OPERATIONS


class UngatedMessageViewSet(BaseViewSet):
    serializer_class = MessageSerializer
    queryset = Message.objects.select_related("author")

    def perform_create(self, serializer):
        bind_author(serializer, self.request)


def viewset_without(operation):
    """Gate every operation except ``operation``."""
    remaining = [op for op in PROTECTED_OPERATIONS if op is not operation]
    view_cls = type(f"MessageViewSetWithout{operation.name.title()}", (UngatedMessageViewSet,), {"__module__": __name__})
    return gate_operations(*remaining)(view_cls)


router = SimpleRouter()
for _operation in PROTECTED_OPERATIONS:
    router.register(f"without-{_operation.value}", viewset_without(_operation), basename=f"without-{_operation.value}")

urlpatterns = [
    path("users/", include("authentication.urls")),
    path("", include(router.urls)),
]
