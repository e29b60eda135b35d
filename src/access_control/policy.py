"""Access policy binding: which identity state each operation requires."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from django.conf import settings

from .identity import Identity


class Operation(str, Enum):
    """The protected CRUD operations on a resource."""

    LIST = "list"
    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"


# DRF viewset action names implementing each operation.
OPERATION_ACTIONS: dict[Operation, tuple[str, ...]] = {
    Operation.LIST: ("list",),
    Operation.CREATE: ("create",),
    Operation.READ: ("retrieve",),
    Operation.UPDATE: ("update", "partial_update"),
    Operation.DELETE: ("destroy",),
}


class Requirement(str, Enum):
    """Identity state an operation requires."""

    AUTHENTICATED = "authenticated"
    PUBLIC = "public"

    def is_satisfied_by(self, identity: Identity) -> bool:
        if self is Requirement.PUBLIC:
            return True
        return identity.is_authenticated


@dataclass(frozen=True)
class AccessPolicy:
    """Policy entry for one operation.

    ``redirect_route`` is a logical URL name; ``None`` means
    ``settings.LOGIN_URL``.
    """

    operation: str
    requirement: Requirement = Requirement.AUTHENTICATED
    redirect_route: Optional[str] = None

    @property
    def login_route(self) -> str:
        return self.redirect_route or settings.LOGIN_URL


DEFAULT_POLICIES = ("deny", "allow")


def default_policy() -> str:
    """Return the configured fallback for handlers without a policy."""
    return getattr(settings, "ACCESS_GATE", {}).get("DEFAULT_POLICY", "deny")


def public_views() -> list[str]:
    """Dotted paths of view classes exempt from the deny-by-default fallback."""
    return list(getattr(settings, "ACCESS_GATE", {}).get("PUBLIC_VIEWS", []))


def get_policy(handler) -> Optional[AccessPolicy]:
    """Return the policy attached to a handler by the gate decorators."""
    return getattr(handler, "access_policy", None)


__all__ = [
    "Operation",
    "OPERATION_ACTIONS",
    "Requirement",
    "AccessPolicy",
    "DEFAULT_POLICIES",
    "default_policy",
    "public_views",
    "get_policy",
]
