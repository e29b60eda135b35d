"""Per-request identity as seen by the access gate."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Identity:
    """Either anonymous (``user_id is None``) or authenticated as a user."""

    user_id: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    @classmethod
    def from_request(cls, request) -> "Identity":
        """Build the identity from whatever user the auth layer attached.

        Works with both Django ``HttpRequest`` and DRF ``Request`` objects.
        """
        user = getattr(request, "user", None)
        if user is None or not getattr(user, "is_authenticated", False):
            return ANONYMOUS
        return cls(user_id=str(user.pk))

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.user_id or "anonymous"


ANONYMOUS = Identity()


__all__ = ["Identity", "ANONYMOUS"]
