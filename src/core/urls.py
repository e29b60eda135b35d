"""Root URL configuration for the message board API."""
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView

urlpatterns = [
    path("users/", include("authentication.urls")),
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    path("", include("message_board.urls")),
]
