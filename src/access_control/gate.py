"""The access gate: a login-required check composed onto view handlers.

The gate is applied per handler with ``access_gate`` or per viewset with
``gate_operations``, so protection does not depend on base-class order.
``AccessGateMiddleware`` evaluates a routed handler's policy before DRF
dispatch, and the handler's own wrapper evaluates it again wherever the
handler is called. Handlers with no policy get the configured default.
"""

import functools
import logging
from enum import Enum
from typing import Optional, Union

from django.urls import NoReverseMatch, reverse

from .exceptions import AuthorizationDenied, MisconfiguredRedirect
from .identity import Identity
from .policy import OPERATION_ACTIONS, AccessPolicy, Operation, Requirement

logger = logging.getLogger(__name__)


class Decision(Enum):
    ALLOW = "allow"
    DENY = "deny"


def evaluate(identity: Identity, policy: AccessPolicy) -> Decision:
    """Decide whether ``identity`` may perform ``policy.operation``."""
    if policy.requirement.is_satisfied_by(identity):
        return Decision.ALLOW
    return Decision.DENY


def resolve_login_url(route_name: str) -> str:
    """Reverse the login route by its logical name.

    Literal paths are rejected: the identity provider can be mounted under
    any prefix, and only the URL resolver knows where.
    """
    if not route_name or "/" in route_name:
        raise MisconfiguredRedirect(
            f"Login route must be a URL name such as 'users:login', got {route_name!r}."
        )
    try:
        return reverse(route_name)
    except NoReverseMatch as exc:
        raise MisconfiguredRedirect(f"Login route {route_name!r} does not resolve to a URL.") from exc


def check(request, policy: AccessPolicy) -> None:
    """Raise ``AuthorizationDenied`` if the request may not proceed."""
    identity = Identity.from_request(request)
    if evaluate(identity, policy) is Decision.ALLOW:
        return

    login_url = resolve_login_url(policy.login_route)
    logger.info(
        "Denied %s %s (operation=%s) for anonymous identity; redirecting to %s",
        request.method,
        request.path,
        policy.operation,
        login_url,
    )
    raise AuthorizationDenied(login_url, request.get_full_path(), policy.operation)


def access_gate(operation: Union[Operation, str], redirect_route: Optional[str] = None):
    """Require an authenticated identity before a view handler runs.

    Decorates handler methods (``self, request, *args, **kwargs``). On deny
    the handler is never called and a login redirect is returned instead.
    """
    op = operation.value if isinstance(operation, Operation) else operation
    policy = AccessPolicy(operation=op, requirement=Requirement.AUTHENTICATED, redirect_route=redirect_route)

    def decorator(handler):
        @functools.wraps(handler)
        def wrapper(view, request, *args, **kwargs):
            try:
                check(request, policy)
            except AuthorizationDenied as denied:
                return denied.as_response()
            return handler(view, request, *args, **kwargs)

        wrapper.access_policy = policy
        return wrapper

    return decorator


def public(handler):
    """Mark a handler as intentionally open to anonymous identities."""
    handler.access_policy = AccessPolicy(operation=handler.__name__, requirement=Requirement.PUBLIC)
    return handler


def gate_operations(*operations: Operation, redirect_route: Optional[str] = None):
    """Class decorator gating every viewset action behind ``operations``.

    Only the named operations are wrapped; anything left out stays as it
    was, so the list given here is the full protected set.
    """

    def decorator(view_cls):
        for operation in operations:
            for action in OPERATION_ACTIONS[Operation(operation)]:
                handler = getattr(view_cls, action, None)
                if handler is None:
                    continue
                setattr(view_cls, action, access_gate(operation, redirect_route)(handler))
        return view_cls

    return decorator


__all__ = [
    "Decision",
    "evaluate",
    "resolve_login_url",
    "check",
    "access_gate",
    "public",
    "gate_operations",
]
