"""Bridge from the JWT middleware's identity into DRF.

``JWTAuthMiddleware`` already decided who the caller is; DRF only needs to
surface that user on its own ``Request``.
"""

from typing import Any, Optional, Tuple

from rest_framework.authentication import BaseAuthentication


class MiddlewareUserAuthentication(BaseAuthentication):
    """Expose ``request._request.user`` (set by middleware) to DRF.

    Anonymous callers are not rejected here; they reach the view as
    ``AnonymousUser`` and the access gate decides what happens to them.
    """

    def authenticate(self, request) -> Optional[Tuple[Any, None]]:
        user = getattr(getattr(request, "_request", None), "user", None)
        if user is None or not getattr(user, "is_authenticated", False):
            return None
        return user, None


__all__ = ["MiddlewareUserAuthentication"]
