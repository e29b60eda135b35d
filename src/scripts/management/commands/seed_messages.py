"""Seed demo members and message posts."""

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand

from authentication.managers import UserManager
from message_board.models import Message

DEMO_MEMBERS = {
    "alice@example.com": ("Alice", "alicepass"),
    "bob@example.com": ("Bob", "bobpass"),
}

DEMO_MESSAGES = {
    "alice@example.com": ["Hello board!", "Anyone up for lunch?"],
    "bob@example.com": ["First post from Bob."],
}


def create_seed_users(password_overrides: dict[str, str] | None = None) -> dict:
    """Create the demo members if missing and return an email->User map."""
    User = get_user_model()
    overrides = password_overrides or {}
    users = {}
    for email, (first_name, password) in DEMO_MEMBERS.items():
        user, _ = User.objects.get_or_create(
            email=email,
            defaults={
                "first_name": first_name,
                "password_hash": UserManager.hash_password(overrides.get(email, password)),
            },
        )
        users[email] = user
    return users


def create_seed_messages(users: dict) -> list[Message]:
    """Create demo posts, each authored by the member who owns it."""
    messages = []
    for email, bodies in DEMO_MESSAGES.items():
        for body in bodies:
            message, _ = Message.objects.get_or_create(body=body, author=users[email])
            messages.append(message)
    return messages


class Command(BaseCommand):
    """Management command to seed demo members and message posts."""

    help = (
        "Seed demo members and message posts. "
        "Use --reset to clear previously seeded data first."
    )

    def add_arguments(self, parser):
        parser.add_argument(
            "--reset",
            action="store_true",
            help="Delete the demo members (and, by cascade, their posts) before seeding.",
        )

    def handle(self, *args, **options):
        """Entrypoint for the management command."""
        if options.get("reset"):
            deleted, _ = get_user_model().objects.filter(email__in=list(DEMO_MEMBERS)).delete()
            self.stdout.write(self.style.WARNING(f"Removed {deleted} seeded rows."))

        self.stdout.write("Seeding message board...")
        users = create_seed_users()
        messages = create_seed_messages(users)
        self.stdout.write(
            self.style.SUCCESS(f"Seed completed: {len(users)} members, {len(messages)} messages.")
        )
