"""Ownership binding and the author invariants of message posts."""

from __future__ import annotations

from django.contrib.auth.models import AnonymousUser
from django.test import TestCase
from rest_framework.test import APIRequestFactory

from access_control.exceptions import AuthorReassigned, MissingOwnership
from access_control.ownership import bind_author
from message_board.models import Message
from message_board.serializers import MessageSerializer
from tests.utils import create_user


class MessageInvariantTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.alice = create_user("alice@test.com", "AlicePass123")
        cls.bob = create_user("bob@test.com", "BobPass123")

    def test_save_without_author_is_rejected(self):
        with self.assertRaises(MissingOwnership):
            Message(body="orphan").save()
        self.assertEqual(Message.objects.count(), 0)

    def test_create_with_author_succeeds(self):
        message = Message.objects.create(body="hello", author=self.alice)

        self.assertEqual(Message.objects.get(pk=message.pk).author, self.alice)

    def test_author_cannot_be_reassigned(self):
        message = Message.objects.create(body="hello", author=self.alice)
        loaded = Message.objects.get(pk=message.pk)
        loaded.author = self.bob

        with self.assertRaises(AuthorReassigned):
            loaded.save()
        self.assertEqual(Message.objects.get(pk=message.pk).author, self.alice)

    def test_author_cannot_be_reassigned_after_create(self):
        message = Message.objects.create(body="hello", author=self.alice)
        message.author = self.bob

        with self.assertRaises(AuthorReassigned):
            message.save()

    def test_body_edits_keep_author(self):
        message = Message.objects.create(body="hello", author=self.alice)
        loaded = Message.objects.get(pk=message.pk)
        loaded.body = "edited"
        loaded.save()

        self.assertEqual(Message.objects.get(pk=message.pk).author, self.alice)

    def test_deferred_author_does_not_block_save(self):
        message = Message.objects.create(body="hello", author=self.alice)
        loaded = Message.objects.only("body").get(pk=message.pk)
        loaded.body = "edited"
        loaded.save()

        self.assertEqual(Message.objects.get(pk=message.pk).body, "edited")


class BindAuthorTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.alice = create_user("alice@test.com", "AlicePass123")

    def setUp(self):
        self.factory = APIRequestFactory()

    def _serializer(self, body="bound"):
        serializer = MessageSerializer(data={"body": body})
        serializer.is_valid(raise_exception=True)
        return serializer

    def test_binds_requesting_user(self):
        request = self.factory.post("/messages/")
        request.user = self.alice

        message = bind_author(self._serializer(), request)

        self.assertEqual(message.author, self.alice)
        self.assertEqual(Message.objects.get(pk=message.pk).author_id, self.alice.pk)

    def test_anonymous_binding_is_an_invariant_violation(self):
        request = self.factory.post("/messages/")
        request.user = AnonymousUser()

        with self.assertLogs("access_control.ownership", level="ERROR"):
            with self.assertRaises(MissingOwnership):
                bind_author(self._serializer(), request)
        self.assertEqual(Message.objects.count(), 0)
