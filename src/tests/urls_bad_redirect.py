"""URLconf with a gated handler whose redirect route does not exist."""

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from access_control.gate import gate_operations
from access_control.policy import Operation
from tests.urls_partial import UngatedMessageViewSet


@gate_operations(*Operation, redirect_route="staff:login")
class StaffMessageViewSet(UngatedMessageViewSet):
    pass


router = SimpleRouter()
router.register("staff-messages", StaffMessageViewSet, basename="staff-message")

urlpatterns = [
    path("users/", include("authentication.urls")),
    path("", include(router.urls)),
]
