"""URL patterns for the identity provider.

Mounted under a configurable prefix; the access gate reaches the login
route only through its name, ``users:login``.
"""

from django.urls import path

from .views import LoginView, LogoutView, MeView, RefreshView

app_name = "users"

urlpatterns = [
    path("login/", LoginView.as_view(), name="login"),
    path("refresh/", RefreshView.as_view(), name="refresh"),
    path("logout/", LogoutView.as_view(), name="logout"),
    path("me/", MeView.as_view(), name="me"),
]
