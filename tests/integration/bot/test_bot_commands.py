"""
Integration tests for slash commands dispatched through the registry.
"""

from datetime import timedelta

import pytest

from accounts.infrastructure.models import Account as AccountModel
from accounts.infrastructure.models import CommandLog
from audit.infrastructure.models import AdminAction
from credentials.infrastructure.models import ApiCredential as ApiCredentialModel
from licenses.infrastructure.models import License as LicenseModel
from tests.support import (
    ADMIN_ID,
    FIXED_NOW,
    KEY_SECOND,
    KEY_THIRD,
    KEY_UNUSED,
    OTHER_USER_ID,
    PASSWORD,
    USER_ID,
)


def field_map(reply):
    return {field.name: field.value for field in reply.fields}


def signup(dispatch, user_id=USER_ID, username="alice", key=KEY_UNUSED):
    return dispatch(
        "signup", caller_id=user_id, username=username, password=PASSWORD, license_key=key
    )


def admin(dispatch, command, **options):
    return dispatch(command, caller_id=ADMIN_ID, caller_name="admin", **options)


@pytest.mark.django_db(databases=["default", "admin"])
@pytest.mark.integration
class TestUserCommands:
    """Integration tests for signup, redeem and get_download."""

    def test_signup(self, dispatch, make_license):
        """Test signing up creates the account and activates the license."""
        make_license(expires_at=FIXED_NOW + timedelta(days=7))

        reply = signup(dispatch)

        assert reply.kind == "success"
        assert reply.title == "Account Created Successfully!"
        fields = field_map(reply)
        assert fields["👤 Username"] == "alice"
        assert fields["🔑 License Key"] == KEY_UNUSED
        assert fields["⏰ Expiry"] == "Jan 22, 2025 12:00 UTC"
        assert AccountModel.objects.filter(external_id=USER_ID).exists()

    def test_signup_weak_password(self, dispatch, make_license):
        """Test validation failures become error replies."""
        make_license()

        reply = dispatch(
            "signup", username="alice", password="password", license_key=KEY_UNUSED
        )

        assert reply.is_error is True
        assert reply.title == "Weak Password"
        assert LicenseModel.objects.get(key=KEY_UNUSED).status == "unused"

    def test_signup_missing_option(self, dispatch):
        """Test required options are enforced."""
        reply = dispatch("signup", username="alice", license_key=KEY_UNUSED)

        assert reply.is_error is True
        assert "password" in reply.description

    def test_redeem(self, dispatch, make_license):
        """Test redeeming a key."""
        make_license()

        reply = dispatch("redeem", license_key=KEY_UNUSED.lower())

        assert reply.title == "License Redeemed Successfully!"
        assert field_map(reply)["📊 Total Licenses"] == "1"
        assert field_map(reply)["⏰ Expiry"] == "Never"

    def test_redeem_already_redeemed(self, dispatch, make_license):
        """Test redeeming a key the caller already owns shows when."""
        make_license(status="redeemed", redeemed_at=FIXED_NOW - timedelta(hours=1))

        reply = dispatch("redeem", license_key=KEY_UNUSED)

        assert reply.is_error is True
        assert reply.title == "License Already Redeemed"
        assert "by you" in reply.description
        assert "Jan 15, 2025 11:00 UTC" in reply.description

    def test_redeem_malformed_key(self, dispatch):
        """Test format errors."""
        reply = dispatch("redeem", license_key="nope")

        assert reply.title == "Invalid License Key Format"

    def test_get_download(self, dispatch, make_license):
        """Test a registered user receives the link once per cooldown."""
        make_license()
        signup(dispatch)

        reply = dispatch("get_download", license_key=KEY_UNUSED)
        again = dispatch("get_download", license_key=KEY_UNUSED)

        assert reply.title == "Download Ready!"
        assert "https://downloads.test/client.zip" in field_map(reply)["📥 Download Link"]
        assert again.is_error is True
        assert again.title == "Download Cooldown Active"
        assert "60 minutes" in again.description

    def test_get_download_not_registered(self, dispatch):
        """Test unregistered users are told to sign up."""
        reply = dispatch("get_download", license_key=KEY_UNUSED)

        assert reply.title == "Not Registered"
        assert "/signup" in reply.description

    def test_commands_are_logged(self, dispatch, make_license):
        """Test each dispatch leaves a command log entry."""
        make_license()

        dispatch("redeem", license_key=KEY_UNUSED)
        dispatch("redeem", license_key=KEY_UNUSED)

        logs = list(CommandLog.objects.order_by("id").values_list("command", "success"))
        assert logs == [("redeem", True), ("redeem", False)]


@pytest.mark.django_db(databases=["default", "admin"])
@pytest.mark.integration
class TestAdminCommands:
    """Integration tests for admin-only commands."""

    @pytest.mark.parametrize(
        "command",
        [
            "create_license",
            "generate_keys",
            "revoke_license",
            "list_licenses",
            "list_users",
            "admin_stats",
        ],
    )
    def test_non_admin_refused(self, dispatch, command):
        """Test every admin command refuses non-admins."""
        reply = dispatch(command, amount=1, tier="LIFETIME", license_key=KEY_UNUSED)

        assert reply.is_error is True
        assert reply.description == "Admin only command."

    def test_create_license(self, dispatch):
        """Test creating licenses with an expiry in days."""
        reply = admin(dispatch, "create_license", amount=12, expiry_days=30)

        assert reply.kind == "admin"
        assert reply.title == "Licenses Generated"
        names = [field.name for field in reply.fields]
        assert names[:2] == ["🔑 Keys 1-10", "🔑 Keys 11-12"]
        assert "30 days" in field_map(reply)["📊 Summary"]
        assert LicenseModel.objects.count() == 12
        assert AdminAction.objects.get().action_type == "LICENSE_GENERATION"

    def test_create_license_amount_bounds(self, dispatch):
        """Test the amount option range."""
        reply = admin(dispatch, "create_license", amount=51)

        assert reply.title == "Invalid Amount"
        assert LicenseModel.objects.count() == 0

    def test_generate_keys(self, dispatch):
        """Test generating keys for a tier."""
        reply = admin(dispatch, "generate_keys", tier="QUARTERLY", amount=2)

        assert reply.title == "Quarterly (3 Months) Keys Generated"
        assert "2160 hours" in field_map(reply)["📊 Generation Summary"]
        expected_expiry = FIXED_NOW + timedelta(hours=2160)
        assert LicenseModel.objects.filter(expires_at=expected_expiry).count() == 2

    def test_generate_keys_unknown_tier(self, dispatch):
        """Test tier choices are enforced."""
        reply = admin(dispatch, "generate_keys", tier="FOREVER", amount=1)

        assert reply.is_error is True

    def test_revoke_license(self, dispatch, make_license):
        """Test revoking shows the previous state and owner."""
        make_license(status="redeemed")

        reply = admin(dispatch, "revoke_license", license_key=KEY_UNUSED, reason="Chargeback")

        fields = field_map(reply)
        assert reply.title == "License Revoked"
        assert fields["📊 Previous Status"] == "✅ Redeemed"
        assert fields["👤 Bound To"] == f"<@{USER_ID}>"
        assert fields["📝 Reason"] == "Chargeback"

    def test_revoke_twice(self, dispatch, make_license):
        """Test revoking twice reports the first revocation."""
        make_license()
        admin(dispatch, "revoke_license", license_key=KEY_UNUSED, reason="First")

        reply = admin(dispatch, "revoke_license", license_key=KEY_UNUSED)

        assert reply.kind == "warning"
        assert reply.title == "Already Revoked"
        assert field_map(reply)["📝 Reason"] == "First"
        assert field_map(reply)["🚫 Revoked By"] == f"<@{ADMIN_ID}>"

    def test_list_licenses(self, dispatch, make_license):
        """Test listing licenses with a status filter."""
        make_license(KEY_UNUSED)
        make_license(KEY_SECOND, status="redeemed")
        make_license(KEY_THIRD, status="revoked")

        reply = admin(dispatch, "list_licenses", status="redeemed")

        assert [field.name for field in reply.fields] == [KEY_SECOND]
        assert "Page 1 of 1 | 1 total" in reply.description

    def test_list_licenses_empty(self, dispatch):
        """Test an empty listing."""
        reply = admin(dispatch, "list_licenses")

        assert reply.kind == "info"
        assert reply.title == "No Licenses Found"

    def test_list_licenses_page_out_of_range(self, dispatch, make_license):
        """Test asking for a page past the end."""
        make_license()

        reply = admin(dispatch, "list_licenses", page=2)

        assert reply.title == "Invalid Page"
        assert reply.description == "Page 2 does not exist. Total pages: 1"

    def test_list_users(self, dispatch, make_license):
        """Test listing registered users."""
        make_license()
        signup(dispatch)

        reply = admin(dispatch, "list_users")

        assert [field.name for field in reply.fields] == ["alice"]
        assert KEY_UNUSED in reply.fields[0].value

    @pytest.mark.parametrize("category", ["overview", "licenses", "actions", "users"])
    def test_admin_stats(self, dispatch, make_license, category):
        """Test every statistics category renders."""
        make_license()
        admin(dispatch, "generate_keys", tier="7D", amount=1)

        reply = admin(dispatch, "admin_stats", category=category)

        assert reply.kind == "admin"
        assert reply.fields or reply.description

    def test_admin_stats_overview_counts(self, dispatch, make_license):
        """Test the overview shows license totals."""
        make_license(KEY_UNUSED)
        make_license(KEY_SECOND, status="redeemed")

        reply = admin(dispatch, "admin_stats")

        assert "**Total:** 2" in field_map(reply)["🔑 Licenses"]


@pytest.mark.django_db(databases=["default", "admin"])
@pytest.mark.integration
class TestApiKeyCommand:
    """Integration tests for /api_key subcommands."""

    def test_create_list_revoke(self, dispatch):
        """Test the full credential lifecycle from chat."""
        created = admin(dispatch, "api_key", subcommand="create", name="Partner", rate_limit=50)
        token = field_map(created)["🔑 API Key"].strip("`\n")

        listed = admin(dispatch, "api_key", subcommand="list")
        revoked = admin(dispatch, "api_key", subcommand="revoke", key=token)
        again = admin(dispatch, "api_key", subcommand="revoke", key=token)

        assert created.title == "API Key Created"
        assert token.startswith("sk_")
        assert ApiCredentialModel.objects.get().quota_per_window == 50
        assert [field.name for field in listed.fields] == ["Partner"]
        assert token not in listed.fields[0].value
        assert revoked.title == "API Key Revoked"
        assert again.is_error is True
        assert again.title == "Not Found"

    def test_list_empty(self, dispatch):
        """Test listing with no credentials."""
        reply = admin(dispatch, "api_key", subcommand="list")

        assert reply.title == "No API Keys"

    def test_rate_limit_bounds(self, dispatch):
        """Test the quota option range."""
        reply = admin(dispatch, "api_key", subcommand="create", name="x", rate_limit=5)

        assert reply.title == "Invalid Amount"

    def test_unknown_subcommand(self, dispatch):
        """Test subcommands are validated."""
        reply = admin(dispatch, "api_key", subcommand="rotate")

        assert reply.is_error is True

    def test_non_admin_refused(self, dispatch):
        """Test non-admins cannot manage keys."""
        reply = dispatch("api_key", subcommand="list", caller_id=OTHER_USER_ID)

        assert reply.title == "Access Denied"
