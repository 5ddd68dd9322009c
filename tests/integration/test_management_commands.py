"""
Integration tests for management commands.
"""

import json
from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from licenses.infrastructure.models import License as LicenseModel
from tests.support import ADMIN_ID, USER_ID


def run(*args, **options):
    out = StringIO()
    call_command(*args, stdout=out, **options)
    return out.getvalue()


class TestExportCommands:
    """Tests for export_commands."""

    def test_prints_every_command(self):
        """Test the exported schema lists all commands."""
        schema = json.loads(run("export_commands"))

        names = [command["name"] for command in schema]
        assert len(names) == 10
        assert "signup" in names
        assert "api_key" in names


@pytest.mark.django_db(databases=["default", "admin"])
@pytest.mark.integration
class TestBotCommand:
    """Tests for bot_command."""

    def test_dispatches_and_prints_reply(self):
        """Test an admin command run from the shell."""
        output = run(
            "bot_command", "create_license", "--user-id", ADMIN_ID, "--option", "amount=3"
        )

        reply = json.loads(output)
        assert reply["title"] == "🔐 Licenses Generated"
        assert reply["footer"] == "Admin Command"
        assert LicenseModel.objects.count() == 3

    def test_error_reply(self):
        """Test failures are printed as error replies."""
        output = run(
            "bot_command", "redeem", "--user-id", USER_ID, "--option", "license_key=bad"
        )

        reply = json.loads(output)
        assert reply["kind"] == "error"
        assert reply["title"] == "❌ Invalid License Key Format"

    def test_malformed_option(self):
        """Test options without a value separator are rejected."""
        with pytest.raises(CommandError):
            run("bot_command", "redeem", "--user-id", USER_ID, "--option", "license_key")


@pytest.mark.django_db(databases=["default", "admin"])
@pytest.mark.integration
class TestSetupLicenses:
    """Tests for setup_licenses."""

    def test_seeds_lifetime_licenses(self, settings):
        """Test seeding and the configuration warnings."""
        settings.CHAT_PLATFORM_TOKEN = ""
        settings.CHAT_PLATFORM_CLIENT_ID = ""

        output = run("setup_licenses", "--licenses", "2")

        assert "DISCORD_TOKEN is not set" in output
        assert "Created 2 lifetime license(s)" in output
        assert LicenseModel.objects.filter(expires_at__isnull=True).count() == 2

    def test_skip_seeding(self, settings):
        """Test --licenses 0 only checks configuration."""
        settings.CHAT_PLATFORM_TOKEN = "token"
        settings.CHAT_PLATFORM_CLIENT_ID = "client"

        output = run("setup_licenses", "--licenses", "0")

        assert "Configuration looks complete" in output
        assert LicenseModel.objects.count() == 0


class TestServeApi:
    """Tests for serve_api."""

    def test_refuses_when_disabled(self, settings):
        """Test the API is not served unless enabled."""
        settings.LICENSE_API_ENABLED = False

        with pytest.raises(CommandError, match="disabled"):
            run("serve_api")
