"""
Django management command to print the slash command schema.

The connector registers these definitions with the chat platform.
"""
import json

from django.core.management.base import BaseCommand

from bot.registry import default_registry


class Command(BaseCommand):
    """Command to export command definitions."""

    help = "Print every slash command definition as JSON"

    def handle(self, *args, **options):
        """Execute the command."""
        self.stdout.write(json.dumps(default_registry().describe(), indent=2, ensure_ascii=False))
