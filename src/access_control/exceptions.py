"""Exceptions raised by the access gate and ownership binding."""

from django.core.exceptions import ImproperlyConfigured


class AuthorizationDenied(Exception):
    """An anonymous identity attempted a protected operation.

    Always recovered locally by redirecting to the login route; never
    surfaced to the caller as an error page.
    """

    def __init__(self, login_url: str, next_path: str, operation: str | None = None):
        self.login_url = login_url
        self.next_path = next_path
        self.operation = operation
        super().__init__(f"Login required for operation {operation!r}")

    def as_response(self):
        """Return a 302 to the login page carrying ``?next=``."""
        # Imported here: auth views pull in forms that need the app registry.
        from django.contrib.auth.views import redirect_to_login

        return redirect_to_login(self.next_path, self.login_url)


class MisconfiguredRedirect(ImproperlyConfigured):
    """The configured login route name does not resolve to a path."""


class OwnershipViolation(Exception):
    """A message post would be persisted with an invalid author."""


class MissingOwnership(OwnershipViolation):
    """A message post reached persistence without an author."""


class AuthorReassigned(OwnershipViolation):
    """The author of an existing message post was changed."""


__all__ = [
    "AuthorizationDenied",
    "MisconfiguredRedirect",
    "OwnershipViolation",
    "MissingOwnership",
    "AuthorReassigned",
]
