"""Message post model with an immutable, mandatory author."""

from django.conf import settings
from django.db import models

from access_control.exceptions import AuthorReassigned, MissingOwnership


class Message(models.Model):
    """A message post on the board.

    ``author`` is bound once at creation from the requesting identity and
    never changes afterwards.
    """

    body = models.TextField()
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="message_posts"
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.body[:50]

    @classmethod
    def from_db(cls, db, field_names, values):
        instance = super().from_db(db, field_names, values)
        instance._loaded_author_id = dict(zip(field_names, values)).get("author_id", models.DEFERRED)
        return instance

    def save(self, *args, **kwargs):
        if self.author_id is None:
            raise MissingOwnership("Message cannot be saved without an author.")
        loaded = getattr(self, "_loaded_author_id", models.DEFERRED)
        if loaded is not models.DEFERRED and loaded != self.author_id:
            raise AuthorReassigned(
                f"Message {self.pk} author cannot change from {loaded} to {self.author_id}."
            )
        super().save(*args, **kwargs)
        self._loaded_author_id = self.author_id


__all__ = ["Message"]
