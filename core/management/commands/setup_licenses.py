"""
Django management command to prepare a fresh installation.

Checks the chat-platform credentials and admin list, then optionally
seeds lifetime licenses for testing.
"""
import logging

from django.conf import settings
from django.core.management.base import BaseCommand

from core.context import get_app_context
from licenses.application.commands.create_licenses import CreateLicensesCommand
from licenses.application.handlers.create_licenses_handler import CreateLicensesHandler

logger = logging.getLogger(__name__)

SETUP_ACTOR = "setup"


class Command(BaseCommand):
    """Command to check configuration and seed test licenses."""

    help = "Check bot configuration and seed lifetime test licenses"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--licenses",
            type=int,
            default=5,
            help="Number of lifetime licenses to seed (default: 5, 0 to skip)",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        problems = []
        if not settings.CHAT_PLATFORM_TOKEN:
            problems.append("DISCORD_TOKEN is not set")
        if not settings.CHAT_PLATFORM_CLIENT_ID:
            problems.append("CLIENT_ID is not set")
        if not settings.ADMIN_IDS:
            problems.append("ADMIN_IDS is empty; nobody can run admin commands")

        for problem in problems:
            self.stdout.write(self.style.WARNING(f"  - {problem}"))
        if not problems:
            self.stdout.write(self.style.SUCCESS("Configuration looks complete"))

        amount = options["licenses"]
        if amount <= 0:
            return

        context = get_app_context()
        created = CreateLicensesHandler(
            license_repository=context.license_repository,
            event_bus=context.event_bus,
            clock=context.clock,
        ).handle(
            CreateLicensesCommand(
                amount=amount,
                actor_id=SETUP_ACTOR,
                actor_name=SETUP_ACTOR,
                tier_code="LIFETIME",
            )
        )
        logger.info("Seeded test licenses", extra={"amount": len(created.keys)})
        self.stdout.write(self.style.SUCCESS(f"Created {len(created.keys)} lifetime license(s):"))
        for key in created.keys:
            self.stdout.write(f"  {key}")
