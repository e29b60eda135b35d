"""Shared helpers for tests (member creation, bearer clients, fake Redis)."""

from __future__ import annotations

from typing import Dict
from unittest import mock

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIClient

from authentication.managers import UserManager
from authentication.services import TokenService
from scripts.management.commands.seed_messages import create_seed_messages, create_seed_users

User = get_user_model()

# Every operation, in the order the board exposes them.
OPERATIONS = ("list", "create", "read", "update", "delete")


class FakeRedis:
    """Minimal Redis stub supporting the commands used by TokenService."""

    def __init__(self):
        self._store: Dict[str, str] = {}

    def setex(self, key: str, ttl_seconds: int, value: str) -> None:
        """Mimic Redis SETEX; TTL is ignored in tests, value stored in-memory."""
        self._store[key] = value

    def get(self, key: str):
        """Return stored value for key or None, matching Redis GET semantics."""
        return self._store.get(key)


class FakeRedisTestCase(TestCase):
    """TestCase with both Redis client lookups patched to a fresh FakeRedis."""

    @classmethod
    def setUpClass(cls):
        super().setUpClass()
        cls.fake_redis = FakeRedis()
        cls.patchers = [
            mock.patch("core.redis_client.get_redis_client", return_value=cls.fake_redis),
            mock.patch("authentication.services.get_redis_client", return_value=cls.fake_redis),
        ]
        for patcher in cls.patchers:
            patcher.start()

    @classmethod
    def tearDownClass(cls):
        for patcher in cls.patchers:
            patcher.stop()
        super().tearDownClass()


def seed_board():
    """Create the demo members and posts used by the ``seed_messages`` command."""

    users = create_seed_users()
    return users, create_seed_messages(users)


def create_user(email: str, password: str, **extra):
    """Create a member with a bcrypt-hashed password for tests."""

    return User.objects.create(
        email=email,
        password_hash=UserManager.hash_password(password),
        **extra,
    )


def auth_client(user) -> APIClient:
    """Return an APIClient carrying a fresh access token for ``user``."""

    token, _ = TokenService.generate_tokens(user)
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
    return client


def perform(client: APIClient, operation: str, prefix: str, pk=None):
    """Issue the HTTP request implementing ``operation`` on ``/<prefix>/``."""

    collection = f"/{prefix}/"
    item = f"/{prefix}/{pk}/"
    if operation == "list":
        return client.get(collection)
    if operation == "create":
        return client.post(collection, {"body": "Posted in a test"}, format="json")
    if operation == "read":
        return client.get(item)
    if operation == "update":
        return client.patch(item, {"body": "Edited in a test"}, format="json")
    if operation == "delete":
        return client.delete(item)
    raise ValueError(f"Unknown operation {operation!r}")


def is_login_redirect(response, login_path: str = "/users/login/") -> bool:
    """True if ``response`` is the access gate's redirect to ``login_path``."""

    return response.status_code == 302 and response["Location"].startswith(f"{login_path}?next=")
