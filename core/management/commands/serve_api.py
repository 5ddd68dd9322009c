"""
Django management command to serve the license validation API.

Runs the development server on LICENSE_API_PORT. Production deployments
point a WSGI server at LicenseBotService.wsgi instead.
"""
import logging

from django.conf import settings
from django.core.management import call_command
from django.core.management.base import BaseCommand, CommandError

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Command to start the HTTP API."""

    help = "Serve the license validation API on LICENSE_API_PORT"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--host",
            type=str,
            default="0.0.0.0",
            help="Interface to bind (default: 0.0.0.0)",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        if not settings.LICENSE_API_ENABLED:
            raise CommandError("License API is disabled; set API_ENABLED=true to serve it")

        address = f"{options['host']}:{settings.LICENSE_API_PORT}"
        logger.info("License API starting", extra={"address": address})
        self.stdout.write(self.style.SUCCESS(f"License API listening on {address}"))
        call_command("runserver", address, use_reloader=False)
