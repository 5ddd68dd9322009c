"""
Django management command to dispatch one slash command from the shell.

Example:
    python manage.py bot_command redeem --user-id 42 --username alice \
        --option license_key=ABCD-EFGH-IJKL-MNOP
"""
import json

from django.core.management.base import BaseCommand, CommandError

from bot.interaction import Interaction
from bot.registry import default_registry
from core.context import get_app_context


def parse_option(raw: str):
    name, sep, value = raw.partition("=")
    if not sep or not name:
        raise CommandError(f"Options must look like name=value, got: {raw}")
    return name, value


class Command(BaseCommand):
    """Command to run a slash command and print the reply."""

    help = "Dispatch one slash command and print the reply as JSON"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument("command", type=str, help="Command name without the slash")
        parser.add_argument("--user-id", type=str, required=True, help="Invoking user id")
        parser.add_argument("--username", type=str, default="shell", help="Invoking username")
        parser.add_argument(
            "--option",
            action="append",
            default=[],
            help="Command option as name=value (repeatable)",
        )
        parser.add_argument("--subcommand", type=str, default=None, help="Subcommand name")

    def handle(self, *args, **options):
        """Execute the command."""
        interaction = Interaction(
            command=options["command"],
            user_id=options["user_id"],
            username=options["username"],
            options=dict(parse_option(raw) for raw in options["option"]),
            subcommand=options["subcommand"],
        )
        reply = default_registry().dispatch(interaction, get_app_context())
        self.stdout.write(json.dumps(reply.to_dict(), indent=2, ensure_ascii=False))
