"""Deny-by-default fallback and handler resolution in AccessGateMiddleware."""

from __future__ import annotations

from django.test import override_settings
from rest_framework.test import APIClient

from access_control.middleware import resolve_handler
from authentication.views import LoginView, MeView
from message_board.views import MessageViewSet
from tests.utils import FakeRedisTestCase, auth_client, create_user, is_login_redirect


class ResolveHandlerTests(FakeRedisTestCase):
    def test_viewset_actions_are_resolved(self):
        view = MessageViewSet.as_view({"get": "retrieve", "patch": "partial_update"})

        self.assertEqual(resolve_handler(view, "PATCH")[1], "partial_update")
        self.assertEqual(resolve_handler(view, "HEAD")[1], "retrieve")
        self.assertEqual(resolve_handler(view, "POST"), (MessageViewSet, None, None))

    def test_viewset_options_resolves_to_ungated_metadata_handler(self):
        view = MessageViewSet.as_view({"get": "list", "post": "create"})
        view_cls, name, handler = resolve_handler(view, "OPTIONS")

        self.assertEqual((view_cls, name), (MessageViewSet, "options"))
        self.assertIsNone(getattr(handler, "access_policy", None))

    def test_api_view_methods_are_resolved(self):
        view = LoginView.as_view()

        self.assertEqual(resolve_handler(view, "POST")[1], "post")
        self.assertEqual(resolve_handler(view, "HEAD")[1], "get")
        self.assertIsNone(resolve_handler(view, "DELETE")[2])

    def test_plain_django_views_are_ignored(self):
        def plain(request):
            return None

        self.assertEqual(resolve_handler(plain, "GET"), (None, None, None))


@override_settings(ROOT_URLCONF="tests.urls_partial")
class DefaultPolicyTests(FakeRedisTestCase):
    """Handlers without a policy follow ACCESS_GATE["DEFAULT_POLICY"]."""

    @classmethod
    def setUpTestData(cls):
        cls.member = create_user("member@test.com", "MemberPass123")

    @override_settings(ACCESS_GATE={"DEFAULT_POLICY": "deny", "PUBLIC_VIEWS": []})
    def test_deny_redirects_anonymous(self):
        response = APIClient().get("/without-list/")

        self.assertTrue(is_login_redirect(response))

    @override_settings(ACCESS_GATE={"DEFAULT_POLICY": "deny", "PUBLIC_VIEWS": []})
    def test_deny_lets_authenticated_through(self):
        response = auth_client(self.member).get("/without-list/")

        self.assertEqual(response.status_code, 200)

    @override_settings(ACCESS_GATE={"DEFAULT_POLICY": "allow", "PUBLIC_VIEWS": []})
    def test_allow_leaves_ungated_handler_public(self):
        response = APIClient().get("/without-list/")

        self.assertEqual(response.status_code, 200)

    @override_settings(
        ACCESS_GATE={"DEFAULT_POLICY": "deny", "PUBLIC_VIEWS": ["tests.urls_partial.MessageViewSetWithoutList"]}
    )
    def test_public_views_are_exempt(self):
        response = APIClient().get("/without-list/")

        self.assertEqual(response.status_code, 200)

    @override_settings(ACCESS_GATE={"DEFAULT_POLICY": "deny", "PUBLIC_VIEWS": []})
    def test_public_handlers_stay_public(self):
        """Explicit ``public()`` opt-ins are not caught by the deny default."""
        response = APIClient().get("/users/login/")

        self.assertEqual(response.status_code, 200)

    @override_settings(ACCESS_GATE={"DEFAULT_POLICY": "allow", "PUBLIC_VIEWS": []})
    def test_allow_still_applies_explicit_policies(self):
        """The default only covers ungated handlers; gated ones redirect either way."""
        response = APIClient().get("/without-list/1/", HTTP_ACCEPT="application/xml")

        self.assertTrue(is_login_redirect(response))

    @override_settings(ACCESS_GATE={"DEFAULT_POLICY": "deny", "PUBLIC_VIEWS": []})
    def test_fallback_denial_is_logged(self):
        with self.assertLogs("access_control.middleware", level="INFO") as logs:
            APIClient().get("/without-list/")

        self.assertTrue(any("MessageViewSetWithoutList.list" in line for line in logs.output))


class ProjectDefaultsTests(FakeRedisTestCase):
    def test_schema_is_public(self):
        response = APIClient().get("/schema/")

        self.assertEqual(response.status_code, 200)

    def test_api_root_is_public(self):
        response = APIClient().get("/")

        self.assertEqual(response.status_code, 200)

    def test_me_is_gated(self):
        self.assertIsNotNone(getattr(MeView.get, "access_policy", None))

    def test_me_denial_is_labelled_profile(self):
        with self.assertLogs("access_control.gate", level="INFO") as logs:
            response = APIClient().get("/users/me/")

        self.assertTrue(is_login_redirect(response))
        self.assertTrue(any("operation=profile" in line for line in logs.output))
        self.assertFalse(any("operation=read" in line for line in logs.output))
