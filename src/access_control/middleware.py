"""Deny-by-default fallback for routed handlers without an access policy."""

import logging

from django.utils.deprecation import MiddlewareMixin

from .exceptions import AuthorizationDenied
from .gate import check
from .policy import AccessPolicy, Requirement, default_policy, get_policy, public_views

logger = logging.getLogger(__name__)


def resolve_handler(view_func, method: str):
    """Return ``(view_cls, handler_name, handler)`` DRF will dispatch to.

    Plain Django views (no ``cls`` attribute) are not inspected and yield
    ``None`` for every element.
    """
    view_cls = getattr(view_func, "cls", None)
    if view_cls is None:
        return None, None, None

    method = method.lower()
    actions = getattr(view_func, "actions", None) or {}
    if actions:
        name = actions.get(method)
        if name is None and method == "head":
            name = actions.get("get")
        elif name is None and method == "options":
            name = "options"
    else:
        name = method
        if method == "head" and not hasattr(view_cls, "head"):
            name = "get"

    if name is None:
        return view_cls, None, None
    return view_cls, name, getattr(view_cls, name, None)


def _dotted_path(view_cls) -> str:
    return f"{view_cls.__module__}.{view_cls.__qualname__}"


class AccessGateMiddleware(MiddlewareMixin):
    """Evaluate the access policy of the DRF handler a request resolves to.

    Handlers carrying a policy are checked with it; ungated handlers get
    ``ACCESS_GATE["DEFAULT_POLICY"]``. OPTIONS on a viewset resolves to the
    ungated ``options`` handler, so it is covered by the fallback.

    Must run after the middleware that sets ``request.user``.
    """

    def process_view(self, request, view_func, view_args, view_kwargs):  # type: ignore[override]
        view_cls, name, handler = resolve_handler(view_func, request.method)
        if handler is None:
            return None
        policy = get_policy(handler)
        ungated = policy is None
        if ungated:
            if default_policy() == "allow" or _dotted_path(view_cls) in public_views():
                return None
            policy = AccessPolicy(operation=name, requirement=Requirement.AUTHENTICATED)

        # Evaluated before DRF dispatch so content negotiation, throttling and
        # parsing never answer an anonymous caller ahead of the gate.
        try:
            check(request, policy)
        except AuthorizationDenied as denied:
            if ungated:
                logger.info("Ungated handler %s.%s denied by default policy", view_cls.__name__, name)
            return denied.as_response()
        return None


__all__ = ["AccessGateMiddleware", "resolve_handler"]
