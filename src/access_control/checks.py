"""System checks for the access gate configuration.

Run at startup (``runserver``, ``check``, ``migrate``) so a login route that
does not resolve is caught before it turns into a redirect loop or a 404.
"""

from django.conf import settings
from django.core.checks import Error, Warning, register
from django.urls import URLPattern, URLResolver, get_resolver

from access_control.exceptions import MisconfiguredRedirect
from access_control.gate import resolve_login_url
from access_control.middleware import resolve_handler
from access_control.policy import DEFAULT_POLICIES, default_policy, get_policy, public_views


def iter_routed_views(patterns=None, prefix: str = ""):
    """Yield ``(route, view_func)`` for every DRF view in the URLconf."""
    if patterns is None:
        patterns = get_resolver().url_patterns
    for entry in patterns:
        if isinstance(entry, URLResolver):
            yield from iter_routed_views(entry.url_patterns, prefix + str(entry.pattern))
        elif isinstance(entry, URLPattern) and getattr(entry.callback, "cls", None) is not None:
            yield prefix + str(entry.pattern), entry.callback


def _routed_handlers():
    """Yield ``(route, view_cls, handler_name, handler)`` for routed handlers."""
    seen = set()
    for route, view_func in iter_routed_views():
        actions = getattr(view_func, "actions", None)
        methods = actions.keys() if actions else view_func.cls.http_method_names
        for method in methods:
            if method in ("head", "options"):
                continue
            view_cls, name, handler = resolve_handler(view_func, method)
            if handler is None or (view_cls, name) in seen:
                continue
            seen.add((view_cls, name))
            yield route, view_cls, name, handler


@register("access_control")
def login_route_resolves(app_configs, **kwargs):
    """Ensure ``LOGIN_URL`` is a route name that reverses."""
    try:
        resolve_login_url(settings.LOGIN_URL)
    except MisconfiguredRedirect as exc:
        return [
            Error(
                str(exc),
                hint="Set LOGIN_URL (env LOGIN_ROUTE) to the name of the identity provider's login route.",
                id="access_control.E001",
            )
        ]
    return []


@register("access_control")
def default_policy_is_valid(app_configs, **kwargs):
    """Ensure ``ACCESS_GATE["DEFAULT_POLICY"]`` is a known value."""
    value = default_policy()
    if value not in DEFAULT_POLICIES:
        return [
            Error(
                f"ACCESS_GATE['DEFAULT_POLICY'] must be one of {DEFAULT_POLICIES}, got {value!r}.",
                id="access_control.E003",
            )
        ]
    return []


@register("access_control")
def handlers_are_gated(app_configs, **kwargs):
    """Report redirect routes that do not resolve and ungated handlers.

    Ungated handlers are only reported when the default policy is "allow",
    since they are then publicly reachable.
    """
    messages: list = []
    allow_by_default = default_policy() == "allow"
    exempt = set(public_views())

    for route, view_cls, name, handler in _routed_handlers():
        policy = get_policy(handler)
        if policy is None:
            dotted = f"{view_cls.__module__}.{view_cls.__qualname__}"
            if allow_by_default and dotted not in exempt:
                messages.append(
                    Warning(
                        f"{view_cls.__name__}.{name} at '{route}' has no access policy and is "
                        f"publicly accessible.",
                        hint="Wrap it with access_gate()/gate_operations(), or mark it public().",
                        obj=view_cls,
                        id="access_control.W001",
                    )
                )
            continue

        if policy.redirect_route is None:
            continue
        try:
            resolve_login_url(policy.redirect_route)
        except MisconfiguredRedirect as exc:
            messages.append(
                Error(
                    f"{view_cls.__name__}.{name}: {exc}",
                    obj=view_cls,
                    id="access_control.E002",
                )
            )

    return messages
